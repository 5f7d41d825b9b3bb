"""
Application layer - Use cases and orchestration for Song Director.

This layer contains:
- Section control use cases (select, number, clear, wait)
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure (observability excepted), api
"""

__all__: list[str] = []
