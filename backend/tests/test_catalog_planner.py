"""Tests for the listing query planner (statement shape, paging math)."""

from __future__ import annotations

import pytest

from sheetshare.catalog.filters import ListingFilters, parse_listing_filters
from sheetshare.catalog.planner import ListingPlan, contains_pattern, total_pages


class TestTotalPages:
    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (50, 50, 1)],
    )
    def test_ceil_or_zero(self, total, limit, expected):
        assert total_pages(total, limit) == expected


class TestContainsPattern:
    def test_plain(self):
        assert contains_pattern("noct") == "%noct%"

    def test_wildcards_are_escaped(self):
        assert contains_pattern("100%_x") == "%100\\%\\_x%"

    def test_backslash_is_escaped(self):
        assert contains_pattern("a\\b") == "%a\\\\b%"


class TestListingPlan:
    def test_offset(self):
        assert ListingPlan(ListingFilters(), page=3, limit=10).offset == 20
        assert ListingPlan(ListingFilters(), page=1, limit=50).offset == 0

    def test_no_terms_means_no_where_clause(self):
        plan = ListingPlan(ListingFilters(), page=1, limit=10)
        assert plan.terms() == []
        assert plan.count_statement().whereclause is None
        assert plan.page_statement().whereclause is None

    def test_one_term_per_active_category(self):
        filters = parse_listing_filters(
            tags="1,2,piano,jazz",
            time_signatures="3,4/4",
            sizes="6/8",
            query="noct",
            owner_id=5,
        )
        plan = ListingPlan(filters, page=1, limit=10)
        assert len(plan.terms()) == 4

    def test_tag_filter_joins_and_groups(self):
        plan = ListingPlan(parse_listing_filters(tags="2,5"), page=2, limit=5)
        sql = str(plan.page_statement().compile())
        assert "JOIN note_tags" in sql
        assert "GROUP BY" in sql
        assert "count(DISTINCT note_tags.tag_id) DESC" in sql

    def test_without_tags_no_join(self):
        plan = ListingPlan(parse_listing_filters(query="noct"), page=1, limit=10)
        sql = str(plan.page_statement().compile())
        assert "note_tags" not in sql
        assert "GROUP BY" not in sql
        assert "notes.created_at DESC" in sql

    def test_count_is_distinct(self):
        plan = ListingPlan(parse_listing_filters(tags="2"), page=1, limit=10)
        sql = str(plan.count_statement().compile())
        assert "count(DISTINCT notes.id)" in sql
