"""Common schemas used across the application."""

from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    """Page metadata returned next to a sliced list.

    Serialized with camelCase aliases to match what the dashboard expects:
        {"total": 42, "page": 1, "pageSize": 10, "totalPages": 5}
    """
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")
