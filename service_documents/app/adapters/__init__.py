"""
Adapters package for the document submission client.

Contains thin HTTP wrappers around the remote API. These adapters
encapsulate:

- Endpoint paths and request shapes
- Mapping of connection errors to TransportFailure
- Mapping of identity endpoint rejections to AuthenticationFailed

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .identity_client import IdentityClient
from .documents_client import DocumentsClient

__all__ = [
    "IdentityClient",
    "DocumentsClient",
]
