"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for serializing/deserializing cached values.

    Serializers handle the conversion between Python objects
    and strings for storage in string-only backends.
    """

    def serialize(self, value: Any) -> str:
        """Serialize value to a string.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized value.

        Raises:
            UnsupportedTypeError: If the value's type cannot be serialized.
        """
        ...

    def deserialize(self, data: str | bytes) -> Any:
        """Deserialize a stored string to a value.

        Args:
            data: The stored representation.

        Returns:
            The deserialized Python object.

        Raises:
            UnrecognizedEncodingError: If the data cannot be deserialized.
        """
        ...
