# app/utils/pagination.py
"""
Pagination and filtering for task listings.

Query parameters arrive as raw strings and are normalized rather than
rejected: a bad page falls back to 1, a bad limit falls back to the default.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Query

from app.config.settings import settings
from app.models.task import Task
from app.schemas.pagination import PaginatedTasks, PaginationMeta
from app.schemas.task import TaskOut, normalize_status_value

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a query value, None if there is none"""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class PageRequest:
    page: int
    limit: int
    skip: int
    filters: List[Any] = field(default_factory=list)
    status: Optional[str] = None
    search: Optional[str] = None

    def apply(self, query: Query) -> Query:
        """Add the status/search filters to a task query"""
        if self.filters:
            query = query.filter(*self.filters)
        return query

    def fetch(self, query: Query) -> List[Task]:
        """One page of the (already filtered) query, newest first"""
        return (
            query.order_by(Task.created_at.desc(), Task.id.desc())
            .offset(self.skip)
            .limit(self.limit)
            .all()
        )


def paginate(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> PageRequest:
    """Normalize raw page/limit/status/search query values"""
    parsed_page = parse_int(page)
    parsed_limit = parse_int(limit)

    valid_page = parsed_page if parsed_page and parsed_page > 0 else 1
    if parsed_limit and 0 < parsed_limit <= settings.MAX_PAGE_LIMIT:
        valid_limit = parsed_limit
    else:
        valid_limit = settings.DEFAULT_PAGE_LIMIT

    status = status or None
    search = search or None

    filters = []
    if status:
        filters.append(func.lower(Task.status) == normalize_status_value(status))
    if search:
        pattern = f"%{escape_like(search)}%"
        filters.append(
            or_(
                Task.title.ilike(pattern, escape="\\"),
                Task.description.ilike(pattern, escape="\\"),
            )
        )

    return PageRequest(
        page=valid_page,
        limit=valid_limit,
        skip=(valid_page - 1) * valid_limit,
        filters=filters,
        status=status,
        search=search,
    )


def format_paginated_response(
    data: Sequence[Any], page: int, limit: int, total: int
) -> PaginatedTasks:
    """Wrap one page of tasks with its pagination metadata"""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    items = [item if isinstance(item, TaskOut) else TaskOut.model_validate(item) for item in data]
    return PaginatedTasks(
        success=True,
        pagination=PaginationMeta(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
        count=len(items),
        data=items,
    )
