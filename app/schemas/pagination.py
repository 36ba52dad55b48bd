# app/schemas/pagination.py
from pydantic import BaseModel, Field
from typing import List

from app.schemas.task import TaskOut


class PaginationMeta(BaseModel):
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")
    items_per_page: int = Field(..., alias="itemsPerPage")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")

    model_config = {
        "populate_by_name": True
    }


class PaginatedTasks(BaseModel):
    success: bool = True
    pagination: PaginationMeta
    count: int
    data: List[TaskOut] = []
