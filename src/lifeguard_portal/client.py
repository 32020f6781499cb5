"""HTTP transport for the lifeguard portal backend REST API."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import httpx

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class PortalError(Exception):
    """Base error for backend request failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PortalConnectionError(PortalError):
    """Raised when the backend cannot be reached or times out."""


class PortalRequestError(PortalError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, detail: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class PortalResponseError(PortalError):
    """Raised when a successful response body cannot be decoded."""


def error_message(status_code: int, body: Any) -> str:
    """Build a human readable message from an error response body.

    FastAPI style bodies carry a ``detail`` field that is either a plain string
    or a list of validation errors shaped like ``{"msg": ...}``.
    """
    fallback = f"Request failed with status {status_code}"
    if not isinstance(body, dict):
        return fallback
    detail = body.get("detail")
    if not detail:
        return fallback
    if isinstance(detail, list):
        parts = []
        for item in detail:
            if isinstance(item, dict) and item.get("msg") is not None:
                parts.append(str(item["msg"]))
            else:
                parts.append(str(item))
        return ", ".join(parts) or fallback
    if isinstance(detail, dict):
        message = detail.get("message")
        return str(message) if message else str(detail)
    return str(detail)


class PortalClient:
    """Thin async client: one call per request, no retries and no caching."""

    def __init__(
        self,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.http = http or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=httpx.Timeout(
                connect=self.settings.connect_timeout,
                read=self.settings.read_timeout,
                write=self.settings.write_timeout,
                pool=self.settings.pool_timeout,
            ),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> PortalClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        content: str | bytes | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a request and return the decoded JSON body.

        ``json`` is serialized for the caller; ``content`` is sent as-is and is
        only used when ``json`` is not given. A 204 response returns ``None``.
        """
        request_headers = {**JSON_HEADERS, "X-Request-Id": str(uuid4())}
        if headers:
            request_headers.update(headers)

        kwargs: dict[str, Any] = {"headers": request_headers, "params": params}
        if json is not None:
            kwargs["json"] = json
        elif content is not None:
            kwargs["content"] = content

        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            timeout_value = self.http.timeout.read
            if timeout_value is not None:
                message = f"Request to {path} timed out after {timeout_value}s"
            else:
                message = f"Request to {path} timed out"
            raise PortalConnectionError(message) from exc
        except httpx.HTTPError as exc:
            raise PortalConnectionError(f"Network error: {exc}") from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = error_message(response.status_code, body)
            logger.info(
                "backend_request_failed method=%s path=%s status=%s message=%s",
                method,
                path,
                response.status_code,
                message,
            )
            raise PortalRequestError(
                message,
                status_code=response.status_code,
                detail=body.get("detail") if isinstance(body, dict) else None,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise PortalResponseError(
                f"Invalid JSON in response from {path} (status {response.status_code})"
            ) from exc

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="GET", **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="POST", **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="PUT", **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="PATCH", **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request(path, method="DELETE", **kwargs)
