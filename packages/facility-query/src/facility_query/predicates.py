"""Typed filter expressions over :class:`FacilityRecord` fields.

Predicates are plain frozen values: two trees built from the same input compare
equal, and they can be evaluated in memory with :meth:`Predicate.matches` or
translated by a storage backend into a parameterized query.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from facility_query.models import FacilityField, FacilityRecord


class Predicate(ABC):
    @abstractmethod
    def matches(self, record: FacilityRecord) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class MatchAll(Predicate):
    def matches(self, record: FacilityRecord) -> bool:
        return True


@dataclass(frozen=True)
class Equals(Predicate):
    field: FacilityField
    value: object

    def matches(self, record: FacilityRecord) -> bool:
        return record.value_of(self.field) == self.value


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match; a missing value never matches."""

    field: FacilityField
    value: str

    def matches(self, record: FacilityRecord) -> bool:
        actual = record.value_of(self.field)
        return isinstance(actual, str) and self.value.lower() in actual.lower()


@dataclass(frozen=True)
class StartsWith(Predicate):
    field: FacilityField
    value: str

    def matches(self, record: FacilityRecord) -> bool:
        actual = record.value_of(self.field)
        return isinstance(actual, str) and actual.lower().startswith(self.value.lower())


@dataclass(frozen=True)
class Between(Predicate):
    """Inclusive numeric range."""

    field: FacilityField
    low: float
    high: float

    def matches(self, record: FacilityRecord) -> bool:
        actual = record.value_of(self.field)
        if not isinstance(actual, (int, float)):
            return False
        return self.low <= actual <= self.high


@dataclass(frozen=True)
class AnyOf(Predicate):
    terms: tuple[Predicate, ...]

    def matches(self, record: FacilityRecord) -> bool:
        return any(term.matches(record) for term in self.terms)


@dataclass(frozen=True)
class AllOf(Predicate):
    terms: tuple[Predicate, ...]

    def matches(self, record: FacilityRecord) -> bool:
        return all(term.matches(record) for term in self.terms)


def all_of(*terms: Predicate) -> Predicate:
    """AND the given terms, dropping no-op ``MatchAll`` entries."""
    kept = tuple(term for term in terms if not isinstance(term, MatchAll))
    if not kept:
        return MatchAll()
    if len(kept) == 1:
        return kept[0]
    return AllOf(kept)
