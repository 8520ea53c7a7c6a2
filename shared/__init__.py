"""
Shared utilities for the document submission client.

This package aggregates common building blocks consumed by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging with submission correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_* packages into shared/.
"""
