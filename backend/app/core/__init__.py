"""Core infrastructure: configuration, database and observability.

Exports configuration settings to simplify import paths inside tests
(e.g. `from app.core import settings`).
"""

from .config import settings  # noqa: F401
