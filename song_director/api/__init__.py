"""API layer - FastAPI routes, middleware and request/response models.

This layer translates HTTP requests into application service calls and
renders their results. It depends on the application layer and reaches
infrastructure only through bootstrap wiring and cross-cutting
observability and monitoring utilities.
"""
