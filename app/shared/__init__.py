"""Shared building blocks used by several features."""

from app.shared.models import TimestampMixin

__all__ = ["TimestampMixin"]
