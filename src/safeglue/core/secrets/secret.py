"""Opaque secret value wrapper."""
from __future__ import annotations

import hmac
from typing import Optional

MASK = "********"


class Secret:
    """A sensitive string that never shows up in ``str()``, ``repr()`` or logs.

    Call :meth:`reveal` at the point of use.
    """

    __slots__ = ("_value", "name")

    def __init__(self, value: str, name: Optional[str] = None) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Secret value must be str, got {type(value).__name__}")
        self._value = value
        self.name = name

    def reveal(self) -> str:
        return self._value

    def __str__(self) -> str:
        return MASK

    def __repr__(self) -> str:
        if self.name:
            return f"Secret(name={self.name!r}, value='{MASK}')"
        return f"Secret('{MASK}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return hmac.compare_digest(self._value.encode("utf-8"), other._value.encode("utf-8"))

    def __hash__(self) -> int:
        return hash((Secret, self._value))

    def __bool__(self) -> bool:
        return bool(self._value)


__all__ = ["MASK", "Secret"]
