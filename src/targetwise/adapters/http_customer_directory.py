"""Customer directory adapter over ``GET /campaigns/customers``."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..domain.customer import Customer
from ..errors import CustomerDirectoryError
from ..ports.customer_directory import CustomerPage
from .http_backend import BackendClient

logger = logging.getLogger(__name__)

CUSTOMERS_PATH = "/campaigns/customers"


def _parse_customers(records: Any) -> list[Customer]:
    if not isinstance(records, list):
        raise CustomerDirectoryError("customers must be a list", details=repr(records)[:200])
    customers: list[Customer] = []
    for i, record in enumerate(records):
        try:
            customers.append(Customer.model_validate(record))
        except ValidationError as e:
            # Unidentifiable records cannot be targeted; skip them.
            logger.warning("customer_skipped", extra={"index": i, "error": str(e)})
    return customers


class HttpCustomerDirectory:
    """Pages through the backend's customer listing."""

    def __init__(self, client: BackendClient, page_size: int = 500, max_pages: int = 200) -> None:
        self._client = client
        self._page_size = page_size
        self._max_pages = max_pages

    def close(self) -> None:
        self._client.close()

    def fetch_page(self, page: int, size: int) -> CustomerPage:
        data = self._client.get_json(
            CUSTOMERS_PATH,
            params={"page": page, "size": size},
            error_cls=CustomerDirectoryError,
        )
        if isinstance(data, list):
            return CustomerPage(customers=_parse_customers(data), current_page=page, total_pages=1)
        if not isinstance(data, dict):
            raise CustomerDirectoryError("Unexpected customer listing shape", details=repr(data)[:200])
        return CustomerPage(
            customers=_parse_customers(data.get("customers", [])),
            current_page=data.get("currentPage", page),
            total_pages=data.get("totalPages", 1),
            total_elements=data.get("totalElements"),
        )

    def fetch_all(self) -> tuple[Customer, ...]:
        """Fetch every page into an immutable snapshot."""
        customers: list[Customer] = []
        page = 0
        while True:
            result = self.fetch_page(page, self._page_size)
            customers.extend(result.customers)
            page += 1
            if page >= result.total_pages or not result.customers:
                break
            if page >= self._max_pages:
                logger.warning(
                    "customer_fetch_truncated",
                    extra={"pages": page, "total_pages": result.total_pages, "customers": len(customers)},
                )
                break
        logger.info("customer_snapshot", extra={"customers": len(customers), "pages": page})
        return tuple(customers)
