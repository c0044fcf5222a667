"""Port: customer directory for targeting snapshots."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..domain.customer import Customer


class CustomerPage(BaseModel):
    """One page of the directory listing."""

    model_config = ConfigDict(populate_by_name=True)

    customers: list[Customer] = Field(default_factory=list)
    current_page: int = Field(default=0, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_elements: int | None = Field(default=None, alias="totalElements")


@runtime_checkable
class CustomerDirectoryPort(Protocol):
    """Read-only access to the customer directory."""

    def fetch_page(self, page: int, size: int) -> CustomerPage: ...

    def fetch_all(self) -> tuple[Customer, ...]: ...
