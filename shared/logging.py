"""
Shared logging configuration for the document submission client.
"""

import sys
import structlog
import logging
import uuid
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variables for correlation IDs
submission_id_var: ContextVar[Optional[str]] = ContextVar('submission_id', default=None)
product_group_var: ContextVar[Optional[str]] = ContextVar('product_group', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured logging for a service."""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            add_correlation_context,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    # Extract service name from logger name
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        service_name = logger_name.split(".")[0]
        event_dict["service"] = service_name

    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add submission correlation context to log events."""
    submission_id = submission_id_var.get()
    if submission_id:
        event_dict["submission_id"] = submission_id

    product_group = product_group_var.get()
    if product_group:
        event_dict["product_group"] = product_group

    return event_dict


def set_submission_context(submission_id: Optional[str] = None, product_group: Optional[str] = None) -> str:
    """Set submission correlation context."""
    if submission_id is None:
        submission_id = str(uuid.uuid4())
    submission_id_var.set(submission_id)
    if product_group:
        product_group_var.set(product_group)
    return submission_id


def clear_context():
    """Clear all context variables."""
    submission_id_var.set(None)
    product_group_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
