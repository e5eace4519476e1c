"""Tests for the user query builder."""

import pytest
from users_common.exceptions import ValidationError
from users_common.query import USER_PROJECTION, Pagination, UserQuery, build_user_query

pytestmark = pytest.mark.unit


class TestBuildUserQuery:
    def test_defaults(self) -> None:
        query = build_user_query()

        assert (query.page, query.limit, query.search) == (1, 10, None)
        assert (query.skip, query.take) == (0, 10)

    def test_skip_and_take(self) -> None:
        query = build_user_query(page=3, limit=5)

        assert (query.skip, query.take) == (10, 5)

    def test_accepts_numeric_strings(self) -> None:
        query = build_user_query(page="2", limit="25")

        assert (query.page, query.limit) == (2, 25)

    def test_none_means_default(self) -> None:
        assert build_user_query(page=None, limit=None) == UserQuery()

    @pytest.mark.parametrize("search", ["", "   ", None])
    def test_blank_search_is_absent(self, search) -> None:
        assert build_user_query(search=search).search is None

    def test_search_is_trimmed(self) -> None:
        assert build_user_query(search="  john ").search == "john"

    def test_rejects_bad_values(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_user_query(page=0, limit="many")

        assert [d["field"] for d in exc_info.value.details] == ["page", "limit"]


class TestUserQuery:
    def test_matches_name_or_email_case_insensitively(self) -> None:
        query = UserQuery(search="JOHN")

        assert query.matches({"name": "John Doe", "email": "jd@example.com"})
        assert query.matches({"name": "Someone", "email": "johnny@example.com"})
        assert not query.matches({"name": "Jane Smith", "email": "jane@example.com"})

    def test_no_search_matches_everything(self) -> None:
        assert UserQuery().matches({})

    def test_cosmos_query_projects_without_password(self) -> None:
        page_query, count_query = UserQuery(page=2, limit=5).to_cosmos()

        assert "password" not in page_query["query"]
        for field in USER_PROJECTION:
            assert f"c.{field}" in page_query["query"]
        assert "OFFSET @skip LIMIT @take" in page_query["query"]
        assert {"name": "@skip", "value": 5} in page_query["parameters"]
        assert {"name": "@take", "value": 5} in page_query["parameters"]
        assert count_query == {"query": "SELECT VALUE COUNT(1) FROM c", "parameters": []}

    def test_cosmos_search_is_parameterized(self) -> None:
        page_query, count_query = UserQuery(search="o'brien").to_cosmos()

        assert "o'brien" not in page_query["query"]
        assert "CONTAINS(c.name, @search, true)" in page_query["query"]
        assert "CONTAINS(c.email, @search, true)" in count_query["query"]
        assert count_query["parameters"] == [{"name": "@search", "value": "o'brien"}]


class TestPagination:
    @pytest.mark.parametrize(("total", "limit", "pages"), [(0, 10, 0), (15, 5, 3), (16, 5, 4), (1, 10, 1)])
    def test_pages_is_ceiling(self, total: int, limit: int, pages: int) -> None:
        assert Pagination.for_total(1, limit, total).pages == pages
