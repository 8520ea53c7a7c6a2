"""
Submission pipeline and response classification.
"""

from .classifier import classify_response
from .outcomes import AuthRejected, ClassifiedOutcome, ClientOrServerError, Success, Unrecognized
from .pipeline import SubmissionPipeline

__all__ = [
    "AuthRejected",
    "ClassifiedOutcome",
    "ClientOrServerError",
    "Success",
    "SubmissionPipeline",
    "Unrecognized",
    "classify_response",
]
