"""
Storage-agnostic search predicates.

A predicate is a conjunction of comparisons against a closed set of estate
fields. Repositories render it into their own query language with bound
parameters, and ``Predicate.matches`` evaluates it against an in-memory record.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from .exceptions import BadRequestError
from .models import EstateSearchCondition, RangeBucket, RangeCondition

UNBOUNDED = -1

# Optional sign and ASCII digits only; no whitespace or underscores
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class EstateField(str, Enum):
    """Estate columns a predicate may reference"""
    RENT = "rent"
    DOOR_HEIGHT = "door_height"
    DOOR_WIDTH = "door_width"
    DOOR_MIN = "door_min"
    DOOR_MAX = "door_max"
    FEATURES = "features"


class Operator(str, Enum):
    GE = ">="
    LT = "<"
    CONTAINS = "contains"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# Every listing search is ordered this way; id breaks popularity ties so that
# pages never overlap.
DEFAULT_ORDER: Tuple[Tuple[str, SortDirection], ...] = (
    ("popularity", SortDirection.DESC),
    ("id", SortDirection.ASC),
)


@dataclass(frozen=True)
class Comparison:
    field: EstateField
    operator: Operator
    value: Any

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.field.value)
        if self.operator is Operator.GE:
            return actual >= self.value
        if self.operator is Operator.LT:
            return actual < self.value
        return self.value in actual


@dataclass(frozen=True)
class Predicate:
    """Conjunction of comparisons"""
    comparisons: Tuple[Comparison, ...]

    def matches(self, record: Any) -> bool:
        return all(c.matches(record) for c in self.comparisons)


@dataclass(frozen=True)
class Page:
    """Limit/offset pair handed to the storage layer"""
    limit: int
    offset: int


@dataclass(frozen=True)
class SearchCriteria:
    """
    Request-scoped search: the predicate is shared by the count read and the
    page read, the page only applies to the latter
    """
    predicate: Predicate
    page: Page


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or not INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def get_range(condition: RangeCondition, range_id: str) -> RangeBucket:
    """
    Resolve a bucket index sent by a client

    Raises:
        BadRequestError: If the index is not an integer or is out of range
    """
    index = _parse_int(range_id)
    if index is None:
        raise BadRequestError(f"range id must be an integer: {range_id!r}")

    if index < 0 or index >= len(condition.ranges):
        raise BadRequestError(f"unexpected range id: {index}")
    return condition.ranges[index]


def parse_page(page: Optional[str], per_page: Optional[str]) -> Page:
    """
    Build the limit/offset for ``page`` (0-based) of ``per_page`` items

    Raises:
        BadRequestError: If either value is missing, not an integer, a negative
            page or a non-positive page size
    """
    page_number = _parse_int(page)
    if page_number is None:
        raise BadRequestError(f"invalid page parameter: {page!r}")
    page_size = _parse_int(per_page)
    if page_size is None:
        raise BadRequestError(f"invalid perPage parameter: {per_page!r}")

    if page_number < 0:
        raise BadRequestError("page must not be negative")
    if page_size <= 0:
        raise BadRequestError("perPage must be positive")
    return Page(limit=page_size, offset=page_number * page_size)


class PredicateBuilder:
    """Accumulates comparisons for one request"""

    def __init__(self):
        self._comparisons: List[Comparison] = []

    def __len__(self) -> int:
        return len(self._comparisons)

    def add(self, field: EstateField, operator: Operator, value: Any) -> "PredicateBuilder":
        self._comparisons.append(Comparison(field, operator, value))
        return self

    def add_bucket(self, field: EstateField, bucket: RangeBucket) -> "PredicateBuilder":
        # Lower bound is inclusive and upper bound exclusive, so adjacent
        # buckets never share a value.
        if bucket.min != UNBOUNDED:
            self.add(field, Operator.GE, bucket.min)
        if bucket.max != UNBOUNDED:
            self.add(field, Operator.LT, bucket.max)
        return self

    def add_range_filter(
        self,
        field: EstateField,
        condition: RangeCondition,
        range_id: str,
    ) -> "PredicateBuilder":
        """Add the bounds of the selected bucket of ``condition``"""
        return self.add_bucket(field, get_range(condition, range_id))

    def add_feature_filters(self, features: str) -> "PredicateBuilder":
        """Require every comma-separated tag to appear in the features text"""
        for tag in features.split(","):
            self.add(EstateField.FEATURES, Operator.CONTAINS, tag)
        return self

    def build(self) -> Predicate:
        """
        Raises:
            BadRequestError: If no comparison was added
        """
        if not self._comparisons:
            raise BadRequestError("search condition not found")
        return Predicate(tuple(self._comparisons))


def build_estate_criteria(
    condition: EstateSearchCondition,
    door_height_range_id: Optional[str] = None,
    door_width_range_id: Optional[str] = None,
    rent_range_id: Optional[str] = None,
    features: Optional[str] = None,
    page: Optional[str] = None,
    per_page: Optional[str] = None,
) -> SearchCriteria:
    """Translate estate search query parameters into criteria; empty values are ignored"""
    builder = PredicateBuilder()
    if door_height_range_id:
        builder.add_range_filter(EstateField.DOOR_HEIGHT, condition.door_height, door_height_range_id)
    if door_width_range_id:
        builder.add_range_filter(EstateField.DOOR_WIDTH, condition.door_width, door_width_range_id)
    if rent_range_id:
        builder.add_range_filter(EstateField.RENT, condition.rent, rent_range_id)
    if features:
        builder.add_feature_filters(features)

    predicate = builder.build()
    return SearchCriteria(predicate=predicate, page=parse_page(page, per_page))
