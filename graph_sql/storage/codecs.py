"""
Serialization of vertex values, keys and attribute maps.

Vertex values and attribute maps are stored as JSON text. Keys are bound as
native database parameters and converted back on read.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from graph_sql.exceptions import DecodeError, SerializationError

NATIVE_KEY_TYPES = (str, int, float, bytes)


class ValueCodec(ABC):
    """Encodes vertex values to text and back. Both directions must be total over supported values."""

    @abstractmethod
    def encode(self, value: Any) -> str:
        pass

    @abstractmethod
    def decode(self, raw: Any) -> Any:
        pass


class JsonCodec(ValueCodec):
    """
    Canonical JSON codec.

    Object keys are sorted and separators are compact, so equal values always
    produce identical text. NaN and infinities are not JSON and are rejected.
    """

    def encode(self, value: Any) -> str:
        try:
            return json.dumps(value, sort_keys=True, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to marshal value: {e}") from e

    def decode(self, raw: Any) -> Any:
        try:
            if isinstance(raw, (bytes, bytearray, memoryview)):
                raw = bytes(raw).decode("utf-8")
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"failed to unmarshal value: {e}") from e


class KeyCodec:
    """
    Converts vertex keys to database parameters and back.

    A column declared as TEXT hands back ``'1'`` for an integer key ``1``;
    passing ``key_type=int`` restores the original type on read.
    """

    def __init__(self, key_type: Optional[Callable[[Any], Any]] = None):
        self.key_type = key_type

    def encode(self, key: Any) -> Any:
        if isinstance(key, bool) or not isinstance(key, NATIVE_KEY_TYPES):
            raise SerializationError(
                f"unsupported key type {type(key).__name__}: keys must be str, int, float or bytes"
            )
        return key

    def decode(self, raw: Any) -> Any:
        if isinstance(raw, memoryview):
            raw = bytes(raw)
        if self.key_type is None or raw is None:
            return raw

        try:
            return self.key_type(raw)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"failed to convert stored key {raw!r}: {e}") from e


def encode_attributes(attributes: Optional[Mapping[str, str]]) -> str:
    """
    Encode an attribute map as JSON text.

    Args:
        attributes: String-to-string mapping, or None for no attributes

    Returns:
        Canonical JSON object text

    Raises:
        SerializationError: If the mapping holds anything but strings
    """
    if attributes is None:
        attributes = {}

    if not isinstance(attributes, Mapping):
        raise SerializationError(
            f"failed to marshal attributes: expected a mapping, got {type(attributes).__name__}"
        )

    for key, value in attributes.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise SerializationError(
                f"failed to marshal attributes: {key!r}: {value!r} is not a string pair"
            )

    return json.dumps(dict(attributes), sort_keys=True, separators=(",", ":"))


def decode_attributes(raw: Any) -> Dict[str, str]:
    """
    Decode stored attribute text back into a mapping.

    A NULL column or a JSON ``null`` decodes to an empty mapping.

    Raises:
        DecodeError: If the text is not a JSON object of strings
    """
    if raw is None:
        return {}

    if isinstance(raw, (bytes, bytearray, memoryview)):
        raw = bytes(raw).decode("utf-8")

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"failed to unmarshal attributes: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise DecodeError(f"failed to unmarshal attributes: {raw!r} is not a string mapping")

    return data
