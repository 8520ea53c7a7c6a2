"""
Signers for challenge data and document payloads.

A signer is any callable taking the bytes to sign and returning the
base64-encoded detached signature. Real deployments plug in a qualified
electronic signature provider; ``demo_signer`` only marks the data.
"""

import base64
from typing import Callable


Signer = Callable[[bytes], str]


def demo_signer(data: bytes) -> str:
    """Return base64("signed:" + data)."""
    return base64.b64encode(b"signed:" + data).decode("ascii")
