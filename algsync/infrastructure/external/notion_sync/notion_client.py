"""
Cliente mínimo de Notion REST API (sin SDKs externos).

Requisitos cubiertos:
- httpx asíncrono (varias requests en paralelo dentro de un lote)
- paginación por start_cursor / next_cursor
- backoff para 429 y 5xx
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

import httpx
from loguru import logger


@dataclass(frozen=True)
class NotionCredentials:
    token: str


class NotionApiError(RuntimeError):
    """Error de integración con Notion."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotionClient:
    """
    Cliente HTTP de Notion.

    Importante:
    - No interpreta propiedades: eso se decide en property_mappers.
    - Una instancia abre un único httpx.AsyncClient; usar `async with` o `aclose()`.
    """

    def __init__(
        self,
        credentials: NotionCredentials,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout_s: float = 30.0,
        max_retries: int = 4,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {credentials.token}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def create_page(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._request_json(
            "POST",
            "/pages",
            body={"parent": {"database_id": database_id}, "properties": properties},
        )

    async def update_page(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._request_json(
            "PATCH",
            f"/pages/{page_id}",
            body={"properties": properties},
        )

    async def iter_database_pages(
        self,
        database_id: str,
        *,
        sorts: Optional[list[dict[str, str]]] = None,
        filter: Optional[dict[str, Any]] = None,
        page_size: int = 100,
    ) -> AsyncIterator[dict[str, Any]]:
        """
        Itera todas las páginas de una base de datos.

        - Maneja paginación por 'start_cursor'
        - Respeta el orden de `sorts`
        """
        cursor: Optional[str] = None
        while True:
            body: dict[str, Any] = {"page_size": page_size}
            if sorts:
                body["sorts"] = sorts
            if filter:
                body["filter"] = filter
            if cursor:
                body["start_cursor"] = cursor

            payload = await self._request_json("POST", f"/databases/{database_id}/query", body=body)
            for page in payload.get("results") or []:
                if not page.get("id"):
                    # Caso raro; preferimos fallar temprano y visible.
                    raise NotionApiError("Notion devolvió una página sin 'id'")
                yield page

            cursor = payload.get("next_cursor")
            if not payload.get("has_more", bool(cursor)) or not cursor:
                break

    async def query_database(
        self,
        database_id: str,
        *,
        sorts: Optional[list[dict[str, str]]] = None,
        filter: Optional[dict[str, Any]] = None,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        pages: list[dict[str, Any]] = []
        async for page in self.iter_database_pages(
            database_id, sorts=sorts, filter=filter, page_size=page_size
        ):
            pages.append(page)
            if len(pages) % page_size == 0:
                logger.debug(f"{len(pages)} pages")
        return pages

    async def is_database_empty(self, database_id: str) -> bool:
        payload = await self._request_json(
            "POST", f"/databases/{database_id}/query", body={"page_size": 1}
        )
        return not payload.get("results")

    async def _request_json(
        self, method: str, path: str, *, body: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial.
        - 5xx: exponencial con jitter simple.
        - red/timeout: como 5xx; agotados los reintentos se lanza NotionApiError.
        - 4xx (no 429): error inmediato (token o ids mal configurados).
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = await self._http.request(method, path, json=body)
            except httpx.TransportError as e:
                # Red/timeout: mismo tratamiento que un 5xx
                if attempt >= self._max_retries:
                    raise NotionApiError(
                        f"Notion {method} {path} sin conexion tras {attempt} reintentos: {e!r}"
                    ) from e
                sleep_s = self._backoff_s(attempt)
                logger.warning(
                    f"Notion {method} {path} -> {type(e).__name__}, reintento {attempt + 1} en {sleep_s:.1f}s"
                )
                await asyncio.sleep(sleep_s)
                continue

            if 200 <= resp.status_code < 300:
                return resp.json()

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise NotionApiError(
                        f"Notion error {resp.status_code} tras {attempt} reintentos: {resp.text}",
                        status_code=resp.status_code,
                    )

                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        sleep_s = float(retry_after)
                    except ValueError:
                        sleep_s = self._min_backoff_s
                else:
                    sleep_s = self._backoff_s(attempt)

                logger.warning(
                    f"Notion {method} {path} -> {resp.status_code}, reintento {attempt + 1} en {sleep_s:.1f}s"
                )
                await asyncio.sleep(sleep_s)
                continue

            # Errores no recuperables
            raise NotionApiError(
                f"Notion request falló {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

        raise NotionApiError(f"Notion request sin respuesta: {method} {path}")

    def _backoff_s(self, attempt: int) -> float:
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)
