"""
Thin async client for the CRM API.

The client only moves requests and responses: it attaches the bearer token
held by its TokenProvider, unwraps the ``{success, message, data}`` envelope
and turns error envelopes into CRMClientError. Access decisions stay on the
server.
"""

from typing import Any, Optional

import httpx

from crm.client.token_provider import InMemoryTokenProvider, TokenProvider
from crm.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class CRMClientError(Exception):
    def __init__(self, status_code: int, message: str, error_code: Optional[str] = None, details: Any = None):
        super().__init__(f"{status_code} {error_code or ''} {message}".strip())
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        self.details = details


class CRMClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.tokens = token_provider or InMemoryTokenProvider()
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "CRMClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------
    # Transport
    # -------------------------
    def _headers(self) -> dict:
        token = self.tokens.get()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._http.request(method, path, headers=self._headers(), **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            logger.debug(
                "CRM API error",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise CRMClientError(
                response.status_code,
                body.get("message") or response.reason_phrase,
                body.get("error_code"),
                body.get("details"),
            )

        return body.get("data")

    # -------------------------
    # Auth
    # -------------------------
    async def login(self, email: str, password: str) -> dict:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.tokens.set(data["auth"]["access_token"])
        return data["user"]

    async def logout(self) -> None:
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.tokens.clear()

    async def me(self) -> dict:
        return await self._request("GET", "/auth/me")

    # -------------------------
    # Quotations
    # -------------------------
    async def create_quotation(self, **fields) -> dict:
        return await self._request("POST", "/quotations", json=fields)

    async def list_quotations(
        self,
        scope: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict:
        params = {"page": page, "page_size": page_size}
        if scope:
            params["scope"] = scope
        if status:
            params["status"] = status
        return await self._request("GET", "/quotations", params=params)

    async def get_quotation(self, quotation_id: int) -> dict:
        return await self._request("GET", f"/quotations/{quotation_id}")

    async def update_quotation(self, quotation_id: int, **changes) -> dict:
        return await self._request("PUT", f"/quotations/{quotation_id}", json=changes)

    # -------------------------
    # Notifications
    # -------------------------
    async def list_notifications(self, unread_only: bool = False) -> dict:
        return await self._request(
            "GET",
            "/notifications",
            params={"unread_only": str(unread_only).lower()},
        )
