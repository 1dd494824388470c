"""Shared response schemas"""

from pydantic import BaseModel


class PaginationResponse(BaseModel):
    """Pagination metadata"""
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    message: str
