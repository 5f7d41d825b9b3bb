"""
Infrastructure layer - Adapters behind the application ports.

This layer contains:
- In-memory section store with long-poll notification
- Jinja2 page and fragment rendering
- Prometheus metrics collection
- Structured logging and correlation IDs

IMPORT RULES:
- CAN import from: domain, application
- CANNOT import from: api
"""

__all__: list[str] = []
