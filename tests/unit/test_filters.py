"""Unit tests for listing filters, sorting and pagination."""

import pytest
from sqlalchemy import select

from ayra.models.map_marker import MapMarkerDB
from ayra.models.pagination import IntensityFilter
from ayra.services.exceptions import InvalidSortError
from ayra.services.filters import (
    ALERT_SORT_FIELDS,
    MARKER_SORT_FIELDS,
    PageRequest,
    apply_page,
    build_alert_filters,
    build_marker_filters,
    parse_sort,
)


def _sql(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


@pytest.mark.unit
class TestMarkerFilters:
    """Unit tests for the marker predicate builder."""

    def test_no_filters_yields_no_clauses(self) -> None:
        """Test that a missing filter matches everything."""
        assert build_marker_filters(None) == []
        assert build_marker_filters(IntensityFilter()) == []

    def test_blank_intensity_is_ignored(self) -> None:
        """Test that a whitespace-only intensity applies no restriction."""
        assert build_marker_filters(IntensityFilter(intensity="   ")) == []

    def test_intensity_is_exact_match(self) -> None:
        """Test that intensity becomes a single equality clause."""
        clauses = build_marker_filters(IntensityFilter(intensity=" high "))

        assert len(clauses) == 1
        assert _sql(clauses[0]) == "map_markers.intensity = 'high'"

    def test_alert_filter_targets_alert_table(self) -> None:
        """Test that alert filters restrict the alerts table."""
        clauses = build_alert_filters(IntensityFilter(intensity="low"))

        assert len(clauses) == 1
        assert _sql(clauses[0]) == "alerts.intensity = 'low'"

    def test_one_filter_drives_both_listings(self) -> None:
        """Test that the shared intensity filter is exported once and serves markers and alerts."""
        import ayra.models as models

        filters = models.IntensityFilter(intensity="moderate")

        assert _sql(build_marker_filters(filters)[0]) == "map_markers.intensity = 'moderate'"
        assert _sql(build_alert_filters(filters)[0]) == "alerts.intensity = 'moderate'"
        assert not hasattr(models, "MapMarkerFilter")


@pytest.mark.unit
class TestParseSort:
    """Unit tests for sort expression parsing."""

    def test_default_used_when_sort_missing(self) -> None:
        """Test that an empty sort falls back to the default expression."""
        clause = parse_sort(None, MARKER_SORT_FIELDS, "id,desc")

        assert _sql(clause) == "map_markers.id DESC"

    def test_direction_defaults_to_ascending(self) -> None:
        """Test that a bare field sorts ascending."""
        clause = parse_sort("title", MARKER_SORT_FIELDS, "id,desc")

        assert _sql(clause) == "map_markers.title ASC"

    def test_direction_is_case_insensitive(self) -> None:
        """Test that DESC and desc are equivalent."""
        clause = parse_sort("alert_datetime,DESC", ALERT_SORT_FIELDS, "id,desc")

        assert _sql(clause) == "alerts.alert_datetime DESC"

    def test_unknown_field_raises(self) -> None:
        """Test that sorting by a non-whitelisted field is rejected."""
        with pytest.raises(InvalidSortError) as exc_info:
            parse_sort("password,asc", MARKER_SORT_FIELDS, "id,desc")

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"allowed": ["id", "intensity", "radius", "title"]}

    def test_unknown_direction_raises(self) -> None:
        """Test that only asc and desc are accepted."""
        with pytest.raises(InvalidSortError):
            parse_sort("id,sideways", MARKER_SORT_FIELDS, "id,desc")


@pytest.mark.unit
class TestPagination:
    """Unit tests for offset/limit pagination."""

    def test_default_page_request(self) -> None:
        """Test that the default request is the first page of ten."""
        page_request = PageRequest()

        assert page_request.page == 0
        assert page_request.size == 10
        assert page_request.offset == 0

    def test_offset_is_page_times_size(self) -> None:
        """Test the offset calculation."""
        assert PageRequest(page=3, size=20).offset == 60

    def test_apply_page_sets_limit_and_offset(self) -> None:
        """Test that the query is limited to one page."""
        query = apply_page(select(MapMarkerDB), PageRequest(page=2, size=10))

        sql = _sql(query)
        assert "LIMIT 10" in sql
        assert "OFFSET 20" in sql
