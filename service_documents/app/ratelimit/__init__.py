"""
Rate limiting package for the document submission client.

Holds the fixed-window gate bounding outbound calls to a quota per
interval, with bursts allowed at the start of each window.
"""

from .window_gate import FixedWindowGate, QuotaState

__all__ = [
    "FixedWindowGate",
    "QuotaState",
]
