"""
Domain models — Pydantic types for the blogger.

    from mdblogger.core.models import AssetMode, BloggerSettings
"""

from mdblogger.core.models.settings import AssetMode, BloggerSettings

__all__ = [
    "AssetMode",
    "BloggerSettings",
]
