"""
Filtering of cost records.

The active selection is an immutable :class:`EventFilters` value passed into
:func:`filter_records`. Every dimension is a set of accepted values; an empty set places no
constraint on that dimension. Dimensions are combined with AND, values within one dimension with
OR. Filtering only narrows: surviving records keep their input order.
"""

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, TypeVar

from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .costs import CostRecord
from .types import CostBracket, CostType, PresentationStatus, Timing


QUARTERS = frozenset({1, 2, 3, 4})

T = TypeVar("T")


@dataclass(frozen=True)
class EventFilters:
    """Immutable selection of all filter dimensions. Empty sets mean "all"."""

    years: frozenset[int] = field(default_factory=frozenset)
    quarters: frozenset[int] = field(default_factory=frozenset)
    cost_types: frozenset[CostType] = field(default_factory=frozenset)
    statuses: frozenset[PresentationStatus] = field(default_factory=frozenset)
    organizers: frozenset[str] = field(default_factory=frozenset)
    cities: frozenset[str] = field(default_factory=frozenset)
    participants: frozenset[str] = field(default_factory=frozenset)
    cost_brackets: frozenset[CostBracket] = field(default_factory=frozenset)
    tags: frozenset[str] = field(default_factory=frozenset)
    timings: frozenset[Timing] = field(default_factory=frozenset)
    search: str = ""
    today: date | None = None

    def evolve(self, **changes: Any) -> "EventFilters":
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        """Return True if no dimension constrains the result."""
        return not (
            self.years
            or self.quarters
            or self.cost_types
            or self.statuses
            or self.organizers
            or self.cities
            or self.participants
            or self.cost_brackets
            or self.tags
            or self.timings
            or self.search.strip()
        )

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "EventFilters":
        """
        Build a selection from a query-string style mapping.

        Accepts a ``QueryDict`` (multiple values per key) or a plain mapping whose values are
        single strings or lists of strings. Empty values are ignored.

        Raises:
            ValidationError: If a value cannot be interpreted for its dimension.

        """
        quarters = _parse(query, "quarter", int)
        if not quarters <= QUARTERS:
            raise ValidationError(_("Quarter must be between 1 and 4."))
        return cls(
            years=_parse(query, "year", int),
            quarters=quarters,
            cost_types=_parse(query, "cost_type", CostType),
            statuses=_parse(query, "status", PresentationStatus),
            organizers=_parse(query, "organizer", str),
            cities=_parse(query, "city", str),
            participants=_parse(query, "participant", str),
            cost_brackets=_parse(query, "cost_bracket", CostBracket),
            tags=_parse(query, "tag", str),
            timings=_parse(query, "timing", Timing),
            search=str(query.get("q") or "").strip(),
        )


def _raw_values(query: Mapping[str, Any], key: str) -> list[str]:
    if hasattr(query, "getlist"):
        values = query.getlist(key)
    else:
        value = query.get(key)
        values = list(value) if isinstance(value, list | tuple | set | frozenset) else [value]
    return [str(value).strip() for value in values if value is not None and str(value).strip()]


def _parse(query: Mapping[str, Any], key: str, convert: Callable[[str], T]) -> frozenset[T]:
    try:
        return frozenset(convert(value) for value in _raw_values(query, key))
    except ValueError as e:
        raise ValidationError(
            _("Invalid value for filter %(key)s."),
            params={"key": key},
        ) from e


def _timing(record: CostRecord, today: date) -> Timing | None:
    last_day = record.event.end_date or record.start_date
    if last_day is None:
        return None
    return Timing.UPCOMING if last_day >= today else Timing.PAST


def _matches_search(record: CostRecord, term: str) -> bool:
    needle = term.casefold()
    haystack = (record.event.title or "", record.city, record.organizer)
    return any(needle in value.casefold() for value in haystack)


def matches(record: CostRecord, filters: EventFilters) -> bool:
    """Return True if ``record`` passes every active dimension of ``filters``."""
    checks: list[tuple[bool, Callable[[], bool]]] = [
        (bool(filters.years), lambda: record.year in filters.years),
        (bool(filters.quarters), lambda: record.quarter in filters.quarters),
        (bool(filters.cost_types), lambda: record.cost_type in filters.cost_types),
        (bool(filters.statuses), lambda: record.presentation_status in filters.statuses),
        (
            bool(filters.organizers),
            lambda: bool(record.organizer) and record.organizer in filters.organizers,
        ),
        (bool(filters.cities), lambda: bool(record.city) and record.city in filters.cities),
        (
            bool(filters.participants),
            lambda: any(name in filters.participants for name in record.colleagues),
        ),
        (bool(filters.cost_brackets), lambda: record.cost_bracket in filters.cost_brackets),
        (bool(filters.tags), lambda: any(tag in filters.tags for tag in record.tags)),
        (
            bool(filters.timings),
            lambda: _timing(record, filters.today or timezone.localdate()) in filters.timings,
        ),
        (bool(filters.search.strip()), lambda: _matches_search(record, filters.search.strip())),
    ]
    return all(check() for active, check in checks if active)


def filter_records(records: Iterable[CostRecord], filters: EventFilters) -> list[CostRecord]:
    """Return the records that pass ``filters``, in their original order."""
    if filters.is_empty:
        return list(records)
    if filters.timings and filters.today is None:
        filters = filters.evolve(today=timezone.localdate())
    return [record for record in records if matches(record, filters)]


@dataclass(frozen=True)
class FilterOptions:
    """Distinct values available for the selection dimensions."""

    years: list[int]
    organizers: list[str]
    cities: list[str]
    participants: list[str]
    tags: list[str]


def filter_options(records: Iterable[CostRecord]) -> FilterOptions:
    """Collect the sorted distinct values of the selectable dimensions."""
    records = list(records)
    return FilterOptions(
        years=sorted({record.year for record in records if record.year is not None}),
        organizers=sorted({record.organizer for record in records if record.organizer}),
        cities=sorted({record.city for record in records if record.city}),
        participants=sorted({name for record in records for name in record.colleagues}),
        tags=sorted({tag for record in records for tag in record.tags}),
    )
