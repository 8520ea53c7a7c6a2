"""
Document submission client.

Public entry point wiring the rate gate, credential manager and transport
around a single shared ``httpx.AsyncClient``::

    async with DocumentSubmissionClient(get_settings(), signer) as client:
        outcome = await client.submit(document, "electronics")
"""

import time
from typing import Callable, Optional

import httpx
from prometheus_client import CollectorRegistry

from shared.config import DocumentsSettings, get_settings
from shared.errors import DocumentsClientError
from shared.logging import clear_context, get_logger, set_submission_context
from shared.metrics import MetricsCollector, get_metrics_collector
from .adapters.documents_client import DocumentsClient
from .adapters.identity_client import IdentityClient
from .auth.credentials import CredentialManager
from .models import Document, encode_document
from .ratelimit.window_gate import FixedWindowGate
from .signing import Signer
from .submission.outcomes import ClassifiedOutcome
from .submission.pipeline import SubmissionPipeline


class DocumentSubmissionClient:
    """Rate-limited, credential-managed client for the documents API.

    ``signer`` produces the detached signature for challenges and documents.
    Metrics are only exported when a ``registry`` (or a ready ``metrics``
    collector) is supplied.
    """

    def __init__(self,
                 settings: Optional[DocumentsSettings],
                 signer: Signer,
                 http_client: Optional[httpx.AsyncClient] = None,
                 clock: Callable[[], float] = time.time,
                 metrics: Optional[MetricsCollector] = None,
                 registry: Optional[CollectorRegistry] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger("documents.client")
        self.metrics = metrics or get_metrics_collector("documents", registry)

        # Validate the quota before any resource is opened
        self.gate = FixedWindowGate(
            self.settings.request_limit,
            self.settings.request_interval_seconds,
            metrics=self.metrics
        )

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds)
        )

        self.credentials = CredentialManager(
            IdentityClient(self.http_client, self.settings.base_url, metrics=self.metrics),
            signer,
            token_ttl=self.settings.token_ttl_seconds,
            clock=clock,
            metrics=self.metrics
        )
        self.pipeline = SubmissionPipeline(
            self.gate,
            self.credentials,
            DocumentsClient(self.http_client, self.settings.base_url, metrics=self.metrics),
            signer
        )

    async def start(self):
        """Start the quota window ticker."""
        await self.gate.start()
        self.logger.info("Document submission client started", base_url=self.settings.base_url)

    async def stop(self):
        """Stop the ticker and close the HTTP client if this client opened it."""
        await self.gate.stop()
        if self._owns_http_client:
            await self.http_client.aclose()
        self.logger.info("Document submission client stopped")

    async def __aenter__(self) -> "DocumentSubmissionClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()

    async def submit(self, document: Document, product_group: str,
                     acquire_timeout: Optional[float] = None) -> ClassifiedOutcome:
        """Submit one document and return its classified outcome."""
        submission_id = set_submission_context(product_group=product_group)
        try:
            payload = encode_document(document)
            outcome = await self.pipeline.submit(payload, product_group, acquire_timeout=acquire_timeout)
        except DocumentsClientError as e:
            self.metrics.record_submission(e.code.lower())
            self.logger.error("Document submission failed", code=e.code, error=e.message)
            raise
        finally:
            clear_context()

        self.metrics.record_submission(outcome.kind)
        if outcome.ok:
            self.logger.info(
                "Document created",
                submission_id=submission_id,
                status_code=outcome.status_code
            )
        else:
            self.logger.warning(
                "Document rejected",
                submission_id=submission_id,
                status_code=outcome.status_code,
                outcome=outcome.kind
            )
        return outcome
