"""
Year index module.

The year index is the domain of the playback cursor: every distinct
ignition year in the dataset, ascending.
"""

from typing import Iterable, Iterator, Tuple

from ..io.load_incidents import Incident


class EmptyYearIndexError(ValueError):
    """No incident has a parseable ignition date."""


def year_label(year: int) -> str:
    """Four-digit display label for a year."""
    return f"{year:04d}"


class YearIndex:
    """Strictly ascending, duplicate-free sequence of years."""

    def __init__(self, years: Iterable[int] = ()):
        self._years: Tuple[int, ...] = tuple(sorted({int(y) for y in years}))

    @classmethod
    def from_incidents(cls, incidents: Iterable[Incident]) -> "YearIndex":
        """
        Collect every parseable ignition year.

        Not filtered by type or acreage: every year that could be
        selected is included.
        """
        return cls(i.year for i in incidents if i.year is not None)

    def __len__(self) -> int:
        return len(self._years)

    def __getitem__(self, position: int) -> int:
        return self._years[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self._years)

    def __contains__(self, year) -> bool:
        return year in self._years

    def __eq__(self, other) -> bool:
        if isinstance(other, YearIndex):
            return self._years == other._years
        return NotImplemented

    def __repr__(self) -> str:
        return f"YearIndex({list(self._years)})"

    @property
    def years(self) -> Tuple[int, ...]:
        return self._years

    @property
    def first(self) -> int:
        if not self._years:
            raise EmptyYearIndexError("Year index is empty")
        return self._years[0]

    @property
    def last(self) -> int:
        if not self._years:
            raise EmptyYearIndexError("Year index is empty")
        return self._years[-1]

    def index_of(self, year: int) -> int:
        """Position of ``year``; raises ValueError if absent."""
        try:
            return self._years.index(year)
        except ValueError:
            raise ValueError(f"Year {year} is not in the index") from None
