from __future__ import annotations

from collections.abc import Iterable, Iterator


class TermIndex:
    """Maps each distinct term to a column id in first-occurrence order.

    Ids are dense in ``[0, len(self))``. Once assigned an id never changes,
    so rows computed against an earlier, smaller index stay valid.
    """

    def __init__(self, terms: Iterable[str] = ()) -> None:
        self._ids: dict[str, int] = {}
        self.extend(terms)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, term: object) -> bool:
        return term in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def get(self, term: str) -> int | None:
        return self._ids.get(term)

    def add(self, term: str) -> int:
        col = self._ids.get(term)
        if col is None:
            col = len(self._ids)
            self._ids[term] = col
        return col

    def extend(self, terms: Iterable[str]) -> int:
        """Add unseen terms; returns how many were new."""
        before = len(self._ids)
        for term in terms:
            self.add(term)
        return len(self._ids) - before

    def copy(self) -> TermIndex:
        return TermIndex(self._ids)

    @property
    def terms(self) -> list[str]:
        return list(self._ids)
