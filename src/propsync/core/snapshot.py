from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


class Snapshot(Mapping[str, Any]):
    """Immutable, ordered mapping of field name to serialized value.

    Compares equal to any mapping with the same items, so a snapshot can be
    checked directly against a plain dict.
    """

    __slots__ = ("_values", "type_name", "dirty_only")

    def __init__(
        self,
        items: Iterable[Tuple[str, Any]] = (),
        *,
        type_name: Optional[str] = None,
        dirty_only: bool = False,
    ) -> None:
        self._values: Dict[str, Any] = dict(items)
        self.type_name = type_name
        self.dirty_only = dirty_only

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def names(self) -> List[str]:
        return list(self._values)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def diff(self, other: Mapping[str, Any]) -> List[Tuple[str, Any, Any]]:
        """Return ``(name, old, new)`` for entries that differ from ``other``.

        ``other`` is the earlier state. Names missing on either side appear
        with None in their place.
        """
        differences: List[Tuple[str, Any, Any]] = []
        for name, value in self._values.items():
            prev = other.get(name)
            if name not in other or value != prev:
                differences.append((name, prev, value))
        for name, prev in other.items():
            if name not in self._values:
                differences.append((name, prev, None))
        return differences

    def __repr__(self) -> str:
        kind = "dirty" if self.dirty_only else "full"
        label = f"{self.type_name} " if self.type_name else ""
        return f"Snapshot({label}{kind}: {self._values!r})"


__all__ = ["Snapshot"]
