"""
Unit tests for the shared structured logging setup.
"""

import json
import logging
from datetime import datetime

import pytest
import structlog

from shared.logging import clear_context, configure_logging, set_submission_context


@pytest.fixture
def render():
    """Run an event through the configured processor chain."""
    configure_logging("documents", "info")
    processors = structlog.get_config()["processors"]
    logger = logging.getLogger("documents.test")
    logger.setLevel(logging.DEBUG)

    def _render(event: str) -> dict:
        event_dict = {"event": event}
        for processor in processors:
            event_dict = processor(logger, "info", event_dict)
        return json.loads(event_dict)

    yield _render
    clear_context()
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test cases for configure_logging."""

    def test_single_iso_timestamp(self, render):
        """Test each line carries one ISO-8601 timestamp string."""
        line = render("hello")

        assert isinstance(line["timestamp"], str)
        datetime.fromisoformat(line["timestamp"].replace("Z", "+00:00"))

    def test_service_and_correlation_fields(self, render):
        """Test the logger prefix and submission context are attached."""
        submission_id = set_submission_context(product_group="electronics")

        line = render("hello")

        assert line["service"] == "documents"
        assert line["logger"] == "documents.test"
        assert line["level"] == "info"
        assert line["submission_id"] == submission_id
        assert line["product_group"] == "electronics"
