"""Translate list parameters into a store query."""

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from users_common.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Public fields, in wire names. ``password`` is never selected.
USER_PROJECTION = ("id", "name", "email", "isActive", "createdAt", "updatedAt")


class Pagination(BaseModel):
    """Pagination descriptor returned alongside list results."""

    page: int = Field(..., description="Current page, 1-based")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Number of records matching the query")
    pages: int = Field(..., description="Number of pages for the given limit")

    @classmethod
    def for_total(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


@dataclass(frozen=True)
class UserQuery:
    """A paged, optionally filtered user query."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str | None = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit

    def _where(self) -> tuple[str, list[dict[str, Any]]]:
        if not self.search:
            return "", []
        clause = " WHERE (CONTAINS(c.name, @search, true) OR CONTAINS(c.email, @search, true))"
        return clause, [{"name": "@search", "value": self.search}]

    def to_cosmos(self) -> tuple[dict[str, Any], dict[str, Any]]:
        """Render the page query and the count query as Cosmos SQL.

        Returns:
            Tuple of ``(page_query, count_query)``, each a dict with ``query``
            and ``parameters`` keys suitable for ``ContainerProxy.query_items``
        """
        where, parameters = self._where()
        select = ", ".join(f"c.{field}" for field in USER_PROJECTION)
        page_query = {
            "query": f"SELECT {select} FROM c{where} ORDER BY c.createdAt DESC OFFSET @skip LIMIT @take",
            "parameters": [
                *parameters,
                {"name": "@skip", "value": self.skip},
                {"name": "@take", "value": self.take},
            ],
        }
        count_query = {
            "query": f"SELECT VALUE COUNT(1) FROM c{where}",
            "parameters": list(parameters),
        }
        return page_query, count_query

    def matches(self, document: dict[str, Any]) -> bool:
        """Evaluate the filter against a stored document in process."""
        if not self.search:
            return True
        needle = self.search.lower()
        return needle in str(document.get("name", "")).lower() or needle in str(document.get("email", "")).lower()

    def pagination(self, total: int) -> Pagination:
        return Pagination.for_total(self.page, self.limit, total)


def _to_int(field: str, value: Any, details: list[dict[str, Any]]) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        details.append({"field": field, "message": f"{field} must be an integer"})
        return None
    if number < 1:
        details.append({"field": field, "message": f"{field} must be at least 1"})
        return None
    return number


def build_user_query(page: Any = DEFAULT_PAGE, limit: Any = DEFAULT_LIMIT, search: str | None = None) -> UserQuery:
    """Build a user query from raw list parameters.

    Args:
        page: Page number, 1-based
        limit: Page size
        search: Free text matched case-insensitively against name or email

    Returns:
        UserQuery ready to hand to a store

    Raises:
        ValidationError: If page or limit is not a positive integer
    """
    details: list[dict[str, Any]] = []
    page_number = _to_int("page", DEFAULT_PAGE if page is None else page, details)
    page_size = _to_int("limit", DEFAULT_LIMIT if limit is None else limit, details)
    if details:
        raise ValidationError(details)

    term = search.strip() if search else None
    return UserQuery(page=page_number, limit=page_size, search=term or None)
