"""Common type definitions used across screenlines modules."""

from __future__ import annotations

from typing import TypeAlias

# JSON-compatible types
JSONValue: TypeAlias = (
    str | int | float | bool | None | dict[str, "JSONValue"] | list["JSONValue"]
)
JSONDict: TypeAlias = dict[str, JSONValue]
