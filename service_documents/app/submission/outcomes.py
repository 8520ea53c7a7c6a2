"""
Classified outcomes of a completed document submission.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    """2xx response."""
    body: str
    status_code: int = 200
    kind = "success"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class AuthRejected:
    """401 response; detail taken from the provider's error markup."""
    detail: str
    status_code: int = 401
    kind = "auth_rejected"

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class ClientOrServerError:
    """Documented 4xx/5xx response with a structured error body."""
    code: int
    detail: str
    kind = "client_or_server_error"

    @property
    def status_code(self) -> int:
        return self.code

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Unrecognized:
    """Any status the API does not document."""
    code: int
    body: str
    kind = "unrecognized"

    @property
    def status_code(self) -> int:
        return self.code

    @property
    def ok(self) -> bool:
        return False


ClassifiedOutcome = Union[Success, AuthRejected, ClientOrServerError, Unrecognized]
