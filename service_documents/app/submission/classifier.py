"""
Response classification for the document create call.
"""

from pydantic import ValidationError

from ..models import ApiErrorBody
from .outcomes import AuthRejected, ClassifiedOutcome, ClientOrServerError, Success, Unrecognized


DOCUMENTED_ERROR_STATUSES = frozenset({400, 403, 404, 500, 503})

ERROR_MESSAGE_OPEN = "<error_message>"
ERROR_MESSAGE_CLOSE = "</error_message>"


def extract_auth_error(body: str) -> str:
    """Pull the text between the error_message tags of a 401 body."""
    start = body.find(ERROR_MESSAGE_OPEN)
    if start == -1:
        return body
    start += len(ERROR_MESSAGE_OPEN)
    end = body.find(ERROR_MESSAGE_CLOSE, start)
    if end == -1:
        return body
    return body[start:end]


def extract_error_message(body: str) -> str:
    """Read ``error_message`` from a JSON error body, or return the body."""
    try:
        return ApiErrorBody.model_validate_json(body).error_message
    except ValidationError:
        return body


def classify_response(status_code: int, body: str) -> ClassifiedOutcome:
    """Map a status code and body to an outcome. Total over all integers."""
    if 200 <= status_code < 300:
        return Success(body=body, status_code=status_code)
    if status_code == 401:
        return AuthRejected(detail=extract_auth_error(body))
    if status_code in DOCUMENTED_ERROR_STATUSES:
        return ClientOrServerError(code=status_code, detail=extract_error_message(body))
    return Unrecognized(code=status_code, body=body)
