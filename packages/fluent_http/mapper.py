"""Type-keyed registry converting between domain objects and wire bytes.

Serializers are resolved along the runtime type's MRO so a converter
registered for a base class also covers its subclasses. Deserializers are
resolved for the exact target type the caller asks for.

The registry holds no lock. Register converters while configuring a client,
before requests start executing concurrently.
"""

from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

from pydantic import BaseModel

from .errors import UnsupportedTypeError

T = TypeVar("T")
TModel = TypeVar("TModel", bound=BaseModel)

Serializer = Callable[[Any], bytes]
Deserializer = Callable[[bytes], Any]


class EntityMapper:
    """Registry of per-type serializers and deserializers."""

    def __init__(self) -> None:
        self._serializers: dict[type, Serializer] = {}
        self._deserializers: dict[type, Deserializer] = {}

    @classmethod
    def with_defaults(cls) -> EntityMapper:
        """Return a mapper pre-loaded with bytes, text and JSON codecs."""
        mapper = cls()
        mapper.register_serializer(bytes, bytes)
        mapper.register_deserializer(bytes, bytes)
        mapper.register_serializer(str, _encode_text)
        mapper.register_deserializer(str, _decode_text)
        for json_type in (dict, list):
            mapper.register_serializer(json_type, _encode_json)
            mapper.register_deserializer(json_type, json.loads)
        return mapper

    def register_serializer(
        self, target: type[T], serializer: Callable[[T], bytes]
    ) -> EntityMapper:
        """Register or replace the serializer for one type."""
        self._serializers[target] = serializer
        return self

    def register_deserializer(
        self, target: type[T], deserializer: Callable[[bytes], T]
    ) -> EntityMapper:
        """Register or replace the deserializer for one type."""
        self._deserializers[target] = deserializer
        return self

    def register_model(self, model: type[TModel]) -> EntityMapper:
        """Register JSON codecs for one pydantic model class."""
        self.register_serializer(model, _encode_model)
        self.register_deserializer(model, model.model_validate_json)
        return self

    def supports_serialization(self, target: type) -> bool:
        """Return True when some serializer covers ``target``."""
        return self._find_serializer(target) is not None

    def supports_deserialization(self, target: type) -> bool:
        """Return True when a deserializer is registered for ``target``."""
        return target in self._deserializers

    def serialize(self, value: object) -> bytes:
        """Serialize ``value`` with the converter registered for its type."""
        serializer = self._find_serializer(type(value))
        if serializer is None:
            raise UnsupportedTypeError(
                message=f"No serializer registered for type {_type_name(type(value))}",
                type_name=_type_name(type(value)),
                operation="serialize",
            )
        return serializer(value)

    def deserialize(self, data: bytes, target: type[T]) -> T:
        """Deserialize ``data`` into an instance of ``target``."""
        deserializer = self._deserializers.get(target)
        if deserializer is None:
            raise UnsupportedTypeError(
                message=f"No deserializer registered for type {_type_name(target)}",
                type_name=_type_name(target),
                operation="deserialize",
            )
        return deserializer(data)

    def _find_serializer(self, target: type) -> Serializer | None:
        for candidate in target.__mro__:
            serializer = self._serializers.get(candidate)
            if serializer is not None:
                return serializer
        return None


def _type_name(target: type) -> str:
    return f"{target.__module__}.{target.__qualname__}"


def _encode_text(value: str) -> bytes:
    return value.encode("utf-8")


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8")


def _encode_json(value: object) -> bytes:
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def _encode_model(value: BaseModel) -> bytes:
    return value.model_dump_json().encode("utf-8")
