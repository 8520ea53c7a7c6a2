"""
Authentication helpers for the document submission client.
"""

from .credentials import Credential, CredentialManager

__all__ = [
    "Credential",
    "CredentialManager",
]
