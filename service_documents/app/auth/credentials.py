"""
Bearer credential lifecycle for the document submission API.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

from shared.errors import InvalidConfiguration
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..adapters.identity_client import IdentityClient
from ..signing import Signer


DEFAULT_TOKEN_TTL = 10 * 60 * 60


@dataclass(frozen=True)
class Credential:
    """Bearer token and the wall-clock time it stops being used."""
    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class CredentialManager:
    """Keeps one bearer credential shared by every caller.

    The credential is refreshed lazily: ``ensure_fresh`` returns the cached
    token while it is valid and otherwise runs the challenge/token exchange.
    Concurrent callers that find the credential stale share a single refresh
    task; the lock only guards the check and the install, never the I/O.
    """

    def __init__(self, identity_client: IdentityClient, signer: Signer,
                 token_ttl: float = DEFAULT_TOKEN_TTL,
                 clock: Callable[[], float] = time.time,
                 metrics: Optional[MetricsCollector] = None):
        if token_ttl is None or token_ttl <= 0:
            raise InvalidConfiguration("Token TTL must be positive", details={"token_ttl": token_ttl})

        self.identity_client = identity_client
        self.signer = signer
        self.token_ttl = token_ttl
        self.clock = clock
        self.metrics = metrics
        self.logger = get_logger("documents.credentials")

        self._credential: Optional[Credential] = None
        self._lock = asyncio.Lock()
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def current(self) -> Optional[Credential]:
        """Installed credential, or None while absent."""
        return self._credential

    async def ensure_fresh(self) -> Credential:
        """Return a valid credential, refreshing it at most once at a time."""
        async with self._lock:
            credential = self._credential
            if credential is not None and credential.is_valid(self.clock()):
                return credential

            if self._refresh_task is None:
                self.logger.info(
                    "Refreshing credential",
                    reason="absent" if credential is None else "expired"
                )
                self._refresh_task = asyncio.create_task(self._refresh())
            refresh_task = self._refresh_task

        # Shielded so one cancelled waiter does not abort the shared refresh
        return await asyncio.shield(refresh_task)

    async def invalidate(self, credential: Credential) -> bool:
        """Drop ``credential`` if it is still the installed one."""
        async with self._lock:
            if self._credential is not credential:
                return False
            self._credential = None

        self.logger.info("Credential invalidated")
        return True

    async def _refresh(self) -> Credential:
        try:
            challenge = await self.identity_client.request_challenge()
            signature = self.signer(challenge.data.encode("utf-8"))
            token = await self.identity_client.exchange_token(challenge.uuid, signature)

            credential = Credential(token=token, expires_at=self.clock() + self.token_ttl)
            async with self._lock:
                self._credential = credential
        except Exception as e:
            if self.metrics:
                self.metrics.record_credential_refresh("failure")
            self.logger.error("Credential refresh failed", error=str(e))
            raise
        finally:
            self._refresh_task = None

        if self.metrics:
            self.metrics.record_credential_refresh("success")
        self.logger.info("Credential refreshed", expires_at=credential.expires_at)
        return credential
