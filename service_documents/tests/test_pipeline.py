"""
Unit tests for the submission pipeline.
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from service_documents.app.auth.credentials import Credential
from service_documents.app.ratelimit.window_gate import FixedWindowGate
from service_documents.app.submission.outcomes import (
    AuthRejected,
    ClientOrServerError,
    Success,
    Unrecognized,
)
from service_documents.app.submission.pipeline import SubmissionPipeline
from shared.errors import AdmissionCancelled, AuthenticationFailed, TransportFailure


PAYLOAD = b'{"doc_id":"doc_1","products":[]}'


@pytest.fixture
def calls():
    return []


@pytest.fixture
def credential():
    return Credential(token="bearer-token", expires_at=10_000.0)


@pytest.fixture
def gate(calls):
    gate = MagicMock()
    gate.acquire = AsyncMock(side_effect=lambda timeout=None: calls.append("acquire"))
    return gate


@pytest.fixture
def credentials(calls, credential):
    credentials = MagicMock()

    async def ensure_fresh():
        calls.append("ensure_fresh")
        return credential

    credentials.ensure_fresh = AsyncMock(side_effect=ensure_fresh)
    credentials.invalidate = AsyncMock(return_value=True)
    return credentials


@pytest.fixture
def transport(calls):
    transport = MagicMock()

    async def create_document(request, token):
        calls.append("send")
        return 200, '{"value":"doc-uuid"}'

    transport.create_document = AsyncMock(side_effect=create_document)
    return transport


@pytest.fixture
def signer():
    return MagicMock(return_value="c2lnbmF0dXJl")


@pytest.fixture
def pipeline(gate, credentials, transport, signer):
    return SubmissionPipeline(gate, credentials, transport, signer)


class TestSubmissionPipeline:
    """Test cases for SubmissionPipeline."""

    @pytest.mark.asyncio
    async def test_steps_run_in_order(self, pipeline, calls):
        """Test gate, credential and transport are used in sequence."""
        outcome = await pipeline.submit(PAYLOAD, "electronics")

        assert calls == ["acquire", "ensure_fresh", "send"]
        assert outcome == Success(body='{"value":"doc-uuid"}')

    @pytest.mark.asyncio
    async def test_request_is_encoded_and_signed(self, pipeline, transport, signer):
        """Test payload is base64-encoded, signed and routed."""
        await pipeline.submit(PAYLOAD, "electronics")

        signer.assert_called_once_with(PAYLOAD)
        request, token = transport.create_document.await_args.args
        assert token == "bearer-token"
        assert base64.b64decode(request.product_document) == PAYLOAD
        assert request.signature == "c2lnbmF0dXJl"
        assert request.product_group == "electronics"
        assert request.type == "LP_INTRODUCE_GOODS"
        assert request.document_format == "MANUAL"

    @pytest.mark.asyncio
    async def test_acquire_timeout_forwarded(self, pipeline, gate):
        """Test the admission timeout reaches the gate."""
        await pipeline.submit(PAYLOAD, "electronics", acquire_timeout=2.5)

        gate.acquire.assert_awaited_once_with(timeout=2.5)

    @pytest.mark.asyncio
    async def test_documented_error_is_returned(self, pipeline, transport):
        """Test error statuses come back as outcomes."""
        transport.create_document.side_effect = None
        transport.create_document.return_value = (400, '{"error_message": "Bad document"}')

        outcome = await pipeline.submit(PAYLOAD, "electronics")

        assert outcome == ClientOrServerError(code=400, detail="Bad document")

    @pytest.mark.asyncio
    async def test_unrecognized_status_is_returned(self, pipeline, transport):
        """Test undocumented statuses come back as outcomes."""
        transport.create_document.side_effect = None
        transport.create_document.return_value = (418, "teapot")

        outcome = await pipeline.submit(PAYLOAD, "electronics")

        assert outcome == Unrecognized(code=418, body="teapot")

    @pytest.mark.asyncio
    async def test_auth_rejection_invalidates_credential(self, pipeline, transport, credentials, credential):
        """Test a 401 drops the credential that was used."""
        transport.create_document.side_effect = None
        transport.create_document.return_value = (
            401, "<error><error_message>Token revoked</error_message></error>"
        )

        outcome = await pipeline.submit(PAYLOAD, "electronics")

        assert outcome == AuthRejected(detail="Token revoked")
        credentials.invalidate.assert_awaited_once_with(credential)

    @pytest.mark.asyncio
    async def test_success_keeps_credential(self, pipeline, credentials):
        """Test successful calls do not invalidate anything."""
        await pipeline.submit(PAYLOAD, "electronics")

        credentials.invalidate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admission_cancelled_propagates(self, pipeline, gate, credentials, transport):
        """Test a cancelled admission stops the submission."""
        gate.acquire.side_effect = AdmissionCancelled("timed out")

        with pytest.raises(AdmissionCancelled):
            await pipeline.submit(PAYLOAD, "electronics")

        credentials.ensure_fresh.assert_not_awaited()
        transport.create_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_authentication_failure_propagates(self, pipeline, gate, credentials, transport):
        """Test a failed refresh propagates after the slot was consumed."""
        credentials.ensure_fresh.side_effect = AuthenticationFailed("token", 500, "boom")

        with pytest.raises(AuthenticationFailed):
            await pipeline.submit(PAYLOAD, "electronics")

        gate.acquire.assert_awaited_once()
        transport.create_document.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self, pipeline, transport):
        """Test connection errors are not classified."""
        transport.create_document.side_effect = TransportFailure("submit", "refused")

        with pytest.raises(TransportFailure):
            await pipeline.submit(PAYLOAD, "electronics")


class TestSlotConsumption:
    """Test cases for slot accounting against a real gate."""

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_slot_consumed(self, credentials, transport, signer):
        """Test a failed send does not hand its slot back."""
        gate = FixedWindowGate(2, 10.0)
        pipeline = SubmissionPipeline(gate, credentials, transport, signer)
        transport.create_document.side_effect = TransportFailure("submit", "refused")
        try:
            with pytest.raises(TransportFailure):
                await pipeline.submit(PAYLOAD, "electronics")

            assert gate.remaining == 1
        finally:
            await gate.stop()

    @pytest.mark.asyncio
    async def test_authentication_failure_keeps_slot_consumed(self, credentials, transport, signer):
        """Test a failed refresh does not hand its slot back."""
        gate = FixedWindowGate(2, 10.0)
        pipeline = SubmissionPipeline(gate, credentials, transport, signer)
        credentials.ensure_fresh.side_effect = AuthenticationFailed("token", 500, "boom")
        try:
            with pytest.raises(AuthenticationFailed):
                await pipeline.submit(PAYLOAD, "electronics")

            assert gate.remaining == 1
            transport.create_document.assert_not_awaited()
        finally:
            await gate.stop()
