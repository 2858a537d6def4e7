"""Serializer implementations."""

from cacheaside.infrastructure.serializers.tagged import TaggedStringSerializer

__all__ = ["TaggedStringSerializer"]
