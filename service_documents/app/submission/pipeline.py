"""
One document submission under the rate gate and credential guarantees.
"""

import base64
from typing import Optional

from shared.logging import get_logger
from ..adapters.documents_client import DocumentsClient
from ..auth.credentials import CredentialManager
from ..models import CreateDocumentRequest
from ..ratelimit.window_gate import FixedWindowGate
from ..signing import Signer
from .classifier import classify_response
from .outcomes import AuthRejected, ClassifiedOutcome


class SubmissionPipeline:
    """Acquire a slot, ensure a credential, sign, send and classify.

    The gate slot is consumed as soon as ``acquire`` returns and is never
    given back, whatever happens later in the call.
    """

    def __init__(self, gate: FixedWindowGate, credentials: CredentialManager,
                 transport: DocumentsClient, signer: Signer):
        self.gate = gate
        self.credentials = credentials
        self.transport = transport
        self.signer = signer
        self.logger = get_logger("documents.pipeline")

    def build_request(self, payload: bytes, product_group: str) -> CreateDocumentRequest:
        return CreateDocumentRequest(
            product_document=base64.b64encode(payload).decode("ascii"),
            signature=self.signer(payload),
            product_group=product_group
        )

    async def submit(self, payload: bytes, product_group: str,
                     acquire_timeout: Optional[float] = None) -> ClassifiedOutcome:
        await self.gate.acquire(timeout=acquire_timeout)
        credential = await self.credentials.ensure_fresh()

        request = self.build_request(payload, product_group)
        status_code, body = await self.transport.create_document(request, credential.token)
        outcome = classify_response(status_code, body)

        if isinstance(outcome, AuthRejected):
            # Next call re-authenticates instead of reusing a rejected token
            await self.credentials.invalidate(credential)

        self.logger.debug("Submission classified", status_code=status_code, outcome=outcome.kind)
        return outcome
