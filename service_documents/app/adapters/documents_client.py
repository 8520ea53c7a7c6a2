"""
Transport for the document create endpoint.
"""

from typing import Optional, Tuple

import httpx

from shared.errors import TransportFailure
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..models import CreateDocumentRequest


CREATE_DOCUMENT_PATH = "/api/v3/lk/documents/commissioning/contract/create"


class DocumentsClient:
    """Sends signed documents to the create endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str,
                 metrics: Optional[MetricsCollector] = None):
        self.http_client = http_client
        self.base_url = base_url.rstrip('/')
        self.metrics = metrics
        self.logger = get_logger("documents.documents_client")

    async def create_document(self, request: CreateDocumentRequest, token: str) -> Tuple[int, str]:
        """POST a create request and return ``(status_code, body)``."""
        try:
            if self.metrics:
                with self.metrics.time_request("submit"):
                    response = await self._post(request, token)
            else:
                response = await self._post(request, token)
        except httpx.TimeoutException as e:
            self.logger.error("Documents endpoint timeout")
            raise TransportFailure("submit", "Documents endpoint timeout", details={"error": str(e)})
        except httpx.RequestError as e:
            self.logger.error("Documents endpoint request error", error=str(e))
            raise TransportFailure("submit", "Documents endpoint unavailable", details={"error": str(e)})

        return response.status_code, response.text

    async def _post(self, request: CreateDocumentRequest, token: str) -> httpx.Response:
        return await self.http_client.post(
            f"{self.base_url}{CREATE_DOCUMENT_PATH}",
            params={"pg": request.product_group},
            content=request.model_dump_json(),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {token}",
                "Accept": "*/*"
            }
        )
