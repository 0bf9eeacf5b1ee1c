"""Thin async client for a hosted Supabase project's PostgREST API.

Only the handful of table operations the roster needs are wrapped: select,
insert, update and delete with ``eq`` filters. Every call returns the JSON
rows PostgREST sends back (``Prefer: return=representation``).
"""

import logging
from typing import Any

import httpx

from client_roster.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class SupabaseRestClient:
    """Infrastructure adapter — connects to ``{supabase_url}/rest/v1``.

    An ``httpx.AsyncClient`` may be injected (tests use ``MockTransport``);
    otherwise one is created and owned by this instance.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    def _get_headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    @staticmethod
    def _eq_filters(filters: dict[str, Any] | None) -> dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Row | None = None,
    ) -> list[Row]:
        url = f"{self._rest_url}/{table}"
        try:
            response = await self._http.request(
                method, url, params=params, json=json, headers=self._get_headers()
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = self._error_message(exc.response)
            logger.error("Supabase %s %s → %s: %s", method, table, exc.response.status_code, message)
            raise StoreError("supabase", f"{method} {table}", message) from exc
        except httpx.HTTPError as exc:
            logger.error("Supabase %s %s transport error: %s", method, table, exc)
            raise StoreError("supabase", f"{method} {table}", str(exc)) from exc

        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or str(body)
        return str(body)

    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
    ) -> list[Row]:
        params = {"select": "*", **self._eq_filters(filters)}
        if order:
            params["order"] = order
        return await self._request("GET", table, params=params)

    async def insert(self, table: str, values: Row) -> list[Row]:
        return await self._request("POST", table, json=values)

    async def update(self, table: str, values: Row, *, filters: dict[str, Any]) -> list[Row]:
        return await self._request("PATCH", table, params=self._eq_filters(filters), json=values)

    async def delete(self, table: str, *, filters: dict[str, Any]) -> list[Row]:
        return await self._request("DELETE", table, params=self._eq_filters(filters))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
