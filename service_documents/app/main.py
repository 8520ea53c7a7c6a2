#!/usr/bin/env python3
"""
Submit randomly generated documents to the configured environment.

Settings come from ``DOCS_*`` environment variables (see shared.config);
the demo signer is used, so only demo environments will accept the calls.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from shared.config import DocumentsSettings, get_settings
from shared.errors import DocumentsClientError
from shared.logging import configure_logging, get_logger
from .client import DocumentSubmissionClient
from .demo import random_document
from .signing import demo_signer
from .submission.outcomes import ClassifiedOutcome


async def run(settings: DocumentsSettings, product_group: str, count: int) -> List[ClassifiedOutcome]:
    """Submit ``count`` random documents concurrently."""
    async with DocumentSubmissionClient(settings, demo_signer) as client:
        return await asyncio.gather(*(
            client.submit(random_document(), product_group)
            for _ in range(count)
        ))


def _parse_args(settings: DocumentsSettings, argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Submit random introduce-goods documents.")
    parser.add_argument("--product-group", default=settings.product_group, help="Product group (pg) routing parameter")
    parser.add_argument("--count", type=int, default=1, help="Number of documents to submit")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = _parse_args(settings, argv)
    configure_logging("documents", settings.log_level)
    logger = get_logger("documents.main")

    try:
        outcomes = asyncio.run(run(settings, args.product_group, args.count))
    except KeyboardInterrupt:
        return 130
    except DocumentsClientError as exc:
        logger.error("Submission run failed", **exc.to_response().model_dump())
        return 1

    for outcome in outcomes:
        logger.info("Outcome", outcome=outcome.kind, status_code=outcome.status_code)

    return 0 if all(outcome.ok for outcome in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
