"""
Shared utilities for the SUDS access layer.

This package aggregates common building blocks consumed by the service
package:

- config: SUDS settings via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_* packages into shared/.
"""
