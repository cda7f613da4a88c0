"""
Domain models — Pydantic types for project files.

Re-exported here for convenient access:

    from ewproj.core.models import Config
"""

from ewproj.core.models.config import Config

__all__ = [
    "Config",
]
