"""JSON value tree — a closed set of frozen node types."""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True)
class JsonObject:
    members: Mapping[str, "JsonNode"]

    def get(self, key: str) -> "JsonNode | None":
        """Look up a member by its literal key (dots are not path separators)."""
        return self.members.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.members

    def keys(self):
        return self.members.keys()


@dataclass(frozen=True)
class JsonArray:
    items: tuple


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonNumber:
    # int for integer literals, Decimal for fractional/exponent literals
    value: int | Decimal

    @property
    def is_integer(self) -> bool:
        return isinstance(self.value, int)


@dataclass(frozen=True)
class JsonBoolean:
    value: bool


@dataclass(frozen=True)
class JsonNull:
    pass


JsonNode = Union[JsonObject, JsonArray, JsonString, JsonNumber, JsonBoolean, JsonNull]


def make_object(pairs) -> JsonObject:
    """Build a JsonObject from (key, node) pairs. The first occurrence of a key wins."""
    members: dict[str, JsonNode] = {}
    for key, node in pairs:
        members.setdefault(key, node)
    return JsonObject(members=MappingProxyType(members))
