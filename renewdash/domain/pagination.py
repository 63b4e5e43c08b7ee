"""List query and page result value objects for backend list endpoints.

List endpoints return one page of rows and a ``pagination`` echo
(``page, limit, order_by, sort_by, search, offset``) but no total row count.
Pagination affordances are therefore inferred from the page size:

* ``has_previous_page`` is ``page > 1``.
* ``has_next_page`` is ``len(rows) == limit``. A full page suggests more rows
  may exist; a short page is taken as the last one. When the remaining row
  count is exactly ``limit`` the next page is reported as available until the
  user pages forward and receives an empty page.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

SortDirection = Literal["ASC", "DESC"]

LIMIT_CHOICES: Tuple[int, ...] = (10, 25, 50, 100)
DEFAULT_LIMIT = 10
DEFAULT_SORT_DIRECTION: SortDirection = "DESC"


@dataclass(frozen=True)
class ListQuery:
    """Query state of one list screen.

    Attributes:
        page: 1-based page number.
        limit: Page size, one of ``LIMIT_CHOICES``.
        sort_field: Column sent as ``order_by``.
        sort_direction: ``ASC`` or ``DESC``, sent as ``sort_by``.
        search: Free text, sent trimmed as ``search`` when non-empty.
        filters: Extra screen filters such as ``client_id`` or ``end_date``.
    """
    page: int = 1
    limit: int = DEFAULT_LIMIT
    sort_field: str = "id"
    sort_direction: SortDirection = DEFAULT_SORT_DIRECTION
    search: str = ""
    filters: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or int(self.page) < 1:
            raise ValueError("page must be a positive integer")
        if self.limit not in LIMIT_CHOICES:
            raise ValueError(f"limit must be one of {LIMIT_CHOICES}")
        if self.sort_direction not in ("ASC", "DESC"):
            raise ValueError("sort_direction must be 'ASC' or 'DESC'")

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def with_search(self, search: str) -> "ListQuery":
        return replace(self, search=search or "", page=1)

    def with_limit(self, limit: int) -> "ListQuery":
        return replace(self, limit=int(limit), page=1)

    def with_filter(self, key: str, value: Optional[Any]) -> "ListQuery":
        kept = tuple((k, v) for k, v in self.filters if k != key)
        text = "" if value is None else str(value)
        if text:
            kept = kept + ((key, text),)
        return replace(self, filters=kept, page=1)

    def toggled_sort(self, field_name: str) -> "ListQuery":
        """Flip direction on the active field, else select ``field_name`` descending."""
        if field_name == self.sort_field:
            direction: SortDirection = "ASC" if self.sort_direction == "DESC" else "DESC"
        else:
            direction = DEFAULT_SORT_DIRECTION
        return replace(self, sort_field=field_name, sort_direction=direction, page=1)

    def to_params(self) -> Dict[str, str]:
        """Query-string parameters, omitting empty values."""
        raw: List[Tuple[str, Any]] = [
            ("page", self.page),
            ("limit", self.limit),
            ("order_by", self.sort_field),
            ("sort_by", self.sort_direction),
            ("search", (self.search or "").strip()),
        ]
        raw.extend(self.filters)
        params: Dict[str, str] = {}
        for key, value in raw:
            text = "" if value is None else str(value)
            if text:
                params[key] = text
        return params

    def row_number(self, index: int) -> int:
        """1-based row number across pages for the row at ``index``."""
        return (self.page - 1) * self.limit + index + 1


@dataclass(frozen=True)
class PageResult:
    """One page of rows returned for ``query``."""
    query: ListQuery
    rows: Tuple[Dict[str, Any], ...] = ()
    pagination: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_previous_page(self) -> bool:
        return self.query.page > 1

    @property
    def has_next_page(self) -> bool:
        return len(self.rows) == self.query.limit

    @property
    def first_row_number(self) -> int:
        if not self.rows:
            return 0
        return self.query.row_number(0)

    @property
    def last_row_number(self) -> int:
        if not self.rows:
            return 0
        return self.query.row_number(len(self.rows) - 1)


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_SORT_DIRECTION",
    "LIMIT_CHOICES",
    "ListQuery",
    "PageResult",
    "SortDirection",
]
