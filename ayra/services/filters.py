"""Query predicate, sort and pagination builders for listings."""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, UnaryExpression

from ayra.models.alert import AlertDB
from ayra.models.map_marker import MapMarkerDB
from ayra.models.pagination import IntensityFilter
from ayra.services.exceptions import InvalidSortError

MARKER_SORT_FIELDS = {
    "id": MapMarkerDB.id,
    "title": MapMarkerDB.title,
    "intensity": MapMarkerDB.intensity,
    "radius": MapMarkerDB.radius,
}

ALERT_SORT_FIELDS = {
    "id": AlertDB.id,
    "alert_datetime": AlertDB.alert_datetime,
    "intensity": AlertDB.intensity,
    "title": AlertDB.title,
}


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index and page size."""

    page: int = 0
    size: int = 10

    @property
    def offset(self) -> int:
        return self.page * self.size


def build_marker_filters(filters: IntensityFilter | None) -> list[ColumnElement[bool]]:
    """Build the conjunctive predicate for a marker listing.

    An intensity restricts results to that exact label; an omitted or
    blank intensity applies no restriction.
    """
    clauses: list[ColumnElement[bool]] = []
    if filters is None:
        return clauses

    if filters.intensity and filters.intensity.strip():
        clauses.append(MapMarkerDB.intensity == filters.intensity.strip())

    return clauses


def build_alert_filters(filters: IntensityFilter | None) -> list[ColumnElement[bool]]:
    """Build the conjunctive predicate for an alert listing."""
    clauses: list[ColumnElement[bool]] = []
    if filters is not None and filters.intensity and filters.intensity.strip():
        clauses.append(AlertDB.intensity == filters.intensity.strip())
    return clauses


def parse_sort(
    sort: str | None,
    allowed: dict,
    default: str,
) -> UnaryExpression:
    """Parse a ``field,direction`` sort expression.

    Args:
        sort: Expression such as ``"title,asc"``; None selects the default
        allowed: Mapping of sortable field names to columns
        default: Expression used when ``sort`` is empty

    Returns:
        Ordering clause for the query

    Raises:
        InvalidSortError: If the field or direction is not recognised
    """
    expression = (sort or "").strip() or default
    field, _, direction = expression.partition(",")
    field = field.strip()
    direction = (direction.strip() or "asc").lower()

    column = allowed.get(field)
    if column is None:
        raise InvalidSortError(
            f"Cannot sort by '{field}'",
            details={"allowed": sorted(allowed)},
        )
    if direction not in ("asc", "desc"):
        raise InvalidSortError(f"Unknown sort direction '{direction}'")

    return column.desc() if direction == "desc" else column.asc()


def apply_page(query: Select, page_request: PageRequest) -> Select:
    """Apply offset/limit pagination to a query."""
    return query.offset(page_request.offset).limit(page_request.size)
