"""
Random introduce-goods documents for exercising the client.
"""

import random
import uuid
from datetime import date, timedelta
from typing import List, Optional

from .models import DOCUMENT_TYPE, Description, Document, Product


def _random_string(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:10]}"


def _random_inn(rng: random.Random) -> str:
    return f"{rng.randrange(1_000_000_000):010d}"


def _random_date(rng: random.Random) -> date:
    return date.today() - timedelta(days=rng.randrange(3650)) + timedelta(days=rng.randrange(3650))


def random_products(rng: random.Random) -> List[Product]:
    return [
        Product(
            certificate_document=_random_string("cert_doc_"),
            certificate_document_date=_random_date(rng),
            certificate_document_number=_random_string("cert_num_"),
            owner_inn=_random_inn(rng),
            producer_inn=_random_inn(rng),
            production_date=_random_date(rng),
            tnved_code=_random_string("tnved_"),
            uit_code=_random_string("uit_"),
            uitu_code=_random_string("uitu_"),
        )
        for _ in range(rng.randint(1, 3))
    ]


def random_document(rng: Optional[random.Random] = None) -> Document:
    """Build a document with random identifiers, INNs and dates."""
    rng = rng or random.Random()
    return Document(
        description=Description(participantInn=_random_inn(rng)),
        doc_id=_random_string("doc_"),
        doc_status=_random_string("status_"),
        doc_type=DOCUMENT_TYPE,
        importRequest=rng.choice([True, False]),
        owner_inn=_random_inn(rng),
        participant_inn=_random_inn(rng),
        producer_inn=_random_inn(rng),
        production_date=_random_date(rng),
        production_type=_random_string("prod_type_"),
        products=random_products(rng),
        reg_date=_random_date(rng),
        reg_number=_random_string("reg_num_"),
    )
