"""
Identity endpoint client: challenge request and token exchange.
"""

from typing import Optional

import httpx
from pydantic import ValidationError

from shared.errors import AuthenticationFailed, TransportFailure
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..models import AuthChallenge, AuthTokenRequest, AuthTokenResponse


AUTH_KEY_PATH = "/api/v3/auth/cert/key"
AUTH_TOKEN_PATH = "/api/v3/auth/cert/"


class IdentityClient:
    """Client for the two round-trips of the certificate login."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str,
                 metrics: Optional[MetricsCollector] = None):
        self.http_client = http_client
        self.base_url = base_url.rstrip('/')
        self.metrics = metrics
        self.logger = get_logger("documents.identity_client")

    async def request_challenge(self) -> AuthChallenge:
        """Fetch a one-time challenge ``{uuid, data}``."""
        response = await self._send(
            "challenge",
            "GET",
            f"{self.base_url}{AUTH_KEY_PATH}",
            headers={"Accept": "*/*"}
        )
        return self._parse("challenge", response, AuthChallenge)

    async def exchange_token(self, challenge_id: str, signature: str) -> str:
        """Trade a signed challenge for a bearer token."""
        payload = AuthTokenRequest(uuid=challenge_id, data=signature)
        response = await self._send(
            "token",
            "POST",
            f"{self.base_url}{AUTH_TOKEN_PATH}",
            json=payload.model_dump(),
            headers={"Accept": "*/*"}
        )
        return self._parse("token", response, AuthTokenResponse).token

    async def _send(self, step: str, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            if self.metrics:
                with self.metrics.time_request(step):
                    return await self.http_client.request(method, url, **kwargs)
            return await self.http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self.logger.error("Identity endpoint timeout", step=step)
            raise TransportFailure(step, "Identity endpoint timeout", details={"error": str(e)})
        except httpx.RequestError as e:
            self.logger.error("Identity endpoint request error", step=step, error=str(e))
            raise TransportFailure(step, "Identity endpoint unavailable", details={"error": str(e)})

    def _parse(self, step: str, response: httpx.Response, model):
        if response.status_code != 200:
            self.logger.warning(
                "Identity endpoint rejected request",
                step=step,
                status_code=response.status_code,
                response=response.text
            )
            raise AuthenticationFailed(step, response.status_code, response.text)

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            self.logger.warning("Malformed identity response", step=step, error=str(e))
            raise AuthenticationFailed(
                step,
                response.status_code,
                response.text,
                message=f"Malformed {step} response"
            )
