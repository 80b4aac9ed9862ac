"""
backend/workhive/core/schemas.py

Core Schemas

Defines core Pydantic models used across the application, including:
- Generic paginated response schema (with a builder from skip/limit/total).
- Generic message response schema for acknowledgements.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Generic schema for paginated list responses.
    """

    total_count: int = Field(..., description="Total number of items matching the query")
    has_next_page: bool = Field(..., description="Whether more items exist after this page")
    items: list[T] = Field(..., description="Items of the current page")

    @classmethod
    def build(cls, items: list[T], total_count: int, skip: int, limit: int) -> "PaginatedResponse[T]":
        return cls(
            total_count=total_count,
            has_next_page=(skip + limit) < total_count,
            items=items,
        )


class MessageResponse(BaseModel):
    """
    Acknowledgement returned by delete and logout operations.
    """

    detail: str = Field(..., description="Response message detail")
