"""Value wrappers that change how a value is spliced into SQL."""
from __future__ import annotations

from typing import Tuple


class SQL(str):
    """Trusted SQL text, inserted verbatim.

    Only wrap text you wrote yourself (or that came out of a render call);
    wrapping user input defeats escaping entirely.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"SQL({str.__repr__(self)})"


class Identifier:
    """A possibly-qualified identifier such as ``schema.table``.

    Renders as a quoted identifier even when bound to a literal placeholder.
    """

    __slots__ = ("parts",)

    def __init__(self, *parts: str) -> None:
        if not parts:
            raise ValueError("Identifier requires at least one part")
        flat: list[str] = []
        for part in parts:
            if isinstance(part, Identifier):
                flat.extend(part.parts)
            elif isinstance(part, str):
                flat.append(part)
            else:
                raise TypeError(f"Identifier parts must be str, got {type(part).__name__}")
        self.parts: Tuple[str, ...] = tuple(flat)

    def __repr__(self) -> str:
        return f"Identifier({', '.join(repr(p) for p in self.parts)})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Identifier) and other.parts == self.parts

    def __hash__(self) -> int:
        return hash(("Identifier", self.parts))


__all__ = ["SQL", "Identifier"]
