"""Tagged string serializer implementation."""

import json
import re
from typing import Any

from cacheaside.core.exceptions import UnrecognizedEncodingError, UnsupportedTypeError

STRING_TAG = "string:"
BOOLEAN_TAG = "boolean:"
NUMBER_TAG = "number:"
OBJECT_TAG = "object:"

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class TaggedStringSerializer:
    """Serializer that keeps the value's type alongside its payload.

    Values are stored as ``<tag>:<payload>`` where the tag is one of
    ``string``, ``boolean``, ``number`` or ``object``. Objects (dicts,
    lists, tuples and None) are stored as JSON.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the serializer.

        Args:
            encoding: Character encoding used when given bytes to decode.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> str:
        """Serialize value to a tagged string.

        Args:
            value: The Python object to serialize.

        Returns:
            The tagged string.

        Raises:
            UnsupportedTypeError: If the value's type is not supported.
        """
        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return BOOLEAN_TAG + ("true" if value else "false")
        if isinstance(value, str):
            return STRING_TAG + value
        if isinstance(value, (int, float)):
            return NUMBER_TAG + str(value)
        if value is None or isinstance(value, (dict, list, tuple)):
            try:
                return OBJECT_TAG + json.dumps(value)
            except (TypeError, ValueError) as e:
                raise UnsupportedTypeError(
                    f"Unprocessable type of value: {e}"
                ) from e

        raise UnsupportedTypeError(
            f"Unprocessable type of value: {type(value).__name__}"
        )

    def deserialize(self, data: str | bytes) -> Any:
        """Deserialize a tagged string.

        Args:
            data: The stored representation.

        Returns:
            The deserialized Python object.

        Raises:
            UnrecognizedEncodingError: If the data has no known tag or
                its payload cannot be parsed.
        """
        if isinstance(data, bytes):
            try:
                data = data.decode(self._encoding)
            except UnicodeDecodeError as e:
                raise UnrecognizedEncodingError(
                    f"Unable to deserialize stored cached value: {e}"
                ) from e

        if data.startswith(STRING_TAG):
            return data[len(STRING_TAG):]

        if data.startswith(BOOLEAN_TAG):
            return data[len(BOOLEAN_TAG):] == "true"

        if data.startswith(NUMBER_TAG):
            payload = data[len(NUMBER_TAG):]
            try:
                if _INTEGER_RE.match(payload):
                    return int(payload)
                return float(payload)
            except ValueError as e:
                raise UnrecognizedEncodingError(
                    f"Unable to deserialize stored cached value. Stored value: {data}"
                ) from e

        if data.startswith(OBJECT_TAG):
            try:
                return json.loads(data[len(OBJECT_TAG):])
            except json.JSONDecodeError as e:
                raise UnrecognizedEncodingError(
                    f"Unable to deserialize stored cached value. Stored value: {data}"
                ) from e

        raise UnrecognizedEncodingError(
            f"Unable to deserialize stored cached value. Stored value: {data}"
        )
