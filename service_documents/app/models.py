"""
Wire and document models for the document submission API.
"""

from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


DOCUMENT_FORMAT = "MANUAL"
DOCUMENT_TYPE = "LP_INTRODUCE_GOODS"


class Description(BaseModel):
    """Document description block."""
    participantInn: Optional[str] = None


class Product(BaseModel):
    """A product line of an introduce-goods document."""
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[date] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None


class Document(BaseModel):
    """Introduce-goods document submitted to the API."""
    description: Optional[Description] = None
    doc_id: Optional[str] = None
    doc_status: Optional[str] = None
    doc_type: Optional[str] = DOCUMENT_TYPE
    importRequest: Optional[bool] = None
    owner_inn: Optional[str] = None
    participant_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    production_type: Optional[str] = None
    products: List[Product] = Field(default_factory=list)
    reg_date: Optional[date] = None
    reg_number: Optional[str] = None


def encode_document(document: Document) -> bytes:
    """Serialize a document to UTF-8 JSON, omitting unset fields."""
    return document.model_dump_json(exclude_none=True).encode("utf-8")


class CreateDocumentRequest(BaseModel):
    """Body of the document create call."""
    document_format: str = DOCUMENT_FORMAT
    product_document: str
    type: str = DOCUMENT_TYPE
    signature: str
    product_group: str


class AuthChallenge(BaseModel):
    """One-time challenge issued by the identity endpoint."""
    uuid: str
    data: str


class AuthTokenRequest(BaseModel):
    """Signed challenge sent to the token endpoint."""
    uuid: str
    data: str


class AuthTokenResponse(BaseModel):
    """Bearer token returned by the token endpoint."""
    token: str


class ApiErrorBody(BaseModel):
    """Structured error body returned with 4xx/5xx statuses."""

    error_message: str = Field(validation_alias=AliasChoices("error_message", "errorMessage"))
