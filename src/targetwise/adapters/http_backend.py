"""Thin JSON-over-HTTP client for the campaign backend."""

from __future__ import annotations

import logging
from typing import Any

import requests

from ..config.runtime import RuntimeSettings
from ..errors import BackendError

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth-token"


class BackendClient:
    """Shared session, timeout and auth cookie for backend calls."""

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        if auth_token:
            self._session.cookies.set(AUTH_COOKIE, auth_token)

    @classmethod
    def from_settings(cls, settings: RuntimeSettings) -> BackendClient:
        return cls(
            base_url=settings.backend_url,
            auth_token=settings.backend_auth_token,
            timeout=settings.request_timeout_seconds,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> BackendClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_json(self, path: str, params: dict | None = None, error_cls: type[BackendError] = BackendError) -> Any:
        return self._request("GET", path, params=params, error_cls=error_cls)

    def post_json(self, path: str, body: dict | None = None, error_cls: type[BackendError] = BackendError) -> Any:
        return self._request("POST", path, json=body, error_cls=error_cls)

    def _request(self, method: str, path: str, error_cls: type[BackendError], **kwargs: Any) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("backend_unreachable", extra={"method": method, "url": url, "error": str(e)})
            raise error_cls(f"Backend unreachable: {e}") from e

        logger.debug("backend_response", extra={"method": method, "url": url, "status": response.status_code})
        if not response.ok:
            details = response.text[:1000]
            logger.error(
                "backend_error",
                extra={"method": method, "url": url, "status": response.status_code, "details": details},
            )
            raise error_cls(
                f"Backend returned {response.status_code}",
                status_code=response.status_code,
                details=details,
            )
        try:
            return response.json()
        except ValueError as e:
            raise error_cls(
                "Invalid JSON response from backend",
                status_code=response.status_code,
                details=response.text[:1000],
            ) from e
