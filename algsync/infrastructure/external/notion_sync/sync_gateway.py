"""
Gateway Notion para el sync de casos/algs.

Implementa RemoteSyncClient sobre NotionClient:
- traduce colecciones ("cases", "algorithms") a database ids
- crea/actualiza en lotes (BATCH_SIZE)
- consulta bases completas y las retorna como snapshots
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Set

from loguru import logger

from algsync.application.interfaces.remote_sync_client import ALGORITHMS, CASES
from algsync.application.services.reconciler import added_algsets_from_names
from algsync.core.config import Settings
from algsync.domain.entities.records import AlgorithmRecord, CaseRecord

from .batching import DEFAULT_BATCH_SIZE, run_in_batches
from .notion_client import NotionClient, NotionCredentials
from .property_mappers import (
    alg_page_properties,
    case_page_properties,
    page_to_alg_snapshot,
    page_to_case_snapshot,
    plain_text,
    sorts_for,
    update_properties,
    update_remote_id,
)


class SyncConfigError(RuntimeError):
    """Error de configuración del sync."""


class NotionSyncGateway:
    """
    Acceso a las bases de casos y algs de Notion.
    """

    def __init__(
        self,
        client: NotionClient,
        *,
        case_database_id: str,
        alg_database_id: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self._client = client
        self._database_ids = {CASES: case_database_id, ALGORITHMS: alg_database_id}
        self._batch_size = batch_size

    async def __aenter__(self) -> "NotionSyncGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    def _database_id(self, collection: str) -> str:
        try:
            return self._database_ids[collection]
        except KeyError:
            raise ValueError(f"Colección desconocida: {collection}") from None

    async def create(self, collection: str, records: Sequence[Any]) -> List[str]:
        database_id = self._database_id(collection)

        async def _create(record: Any) -> str:
            if isinstance(record, CaseRecord):
                properties = case_page_properties(record)
            elif isinstance(record, AlgorithmRecord):
                properties = alg_page_properties(record)
            else:
                raise TypeError(f"Registro no soportado para crear: {type(record).__name__}")
            page = await self._client.create_page(database_id, properties)
            return page["id"]

        return await run_in_batches(_create, records, self._batch_size)

    async def update(self, collection: str, field: str, records: Sequence[Any]) -> int:
        self._database_id(collection)

        async def _update(record: Any) -> None:
            await self._client.update_page(update_remote_id(record), update_properties(field, record))

        await run_in_batches(_update, records, self._batch_size)
        return len(records)

    async def query_all(self, collection: str, sort_keys: Sequence[str]) -> List[Any]:
        logger.info(f"Consultando base '{collection}'...")
        pages = await self._client.query_database(
            self._database_id(collection), sorts=sorts_for(sort_keys)
        )
        logger.info(f"Consulta '{collection}' completada: {len(pages)} páginas")
        mapper = page_to_case_snapshot if collection == CASES else page_to_alg_snapshot
        return [mapper(page) for page in pages]

    async def list_added_algsets(self) -> Set[str]:
        """
        Algsets ya cargados en la base de casos (evita duplicar al agregar otro algset).

        Se apoya en que cada algset tiene un caso "<ALGSET>01".
        """
        pages = await self._client.query_database(
            self._database_id(CASES),
            filter={"property": "name", "title": {"ends_with": "01"}},
        )
        return added_algsets_from_names(plain_text(page, "name") for page in pages)

    async def is_empty(self, collection: str) -> bool:
        return await self._client.is_database_empty(self._database_id(collection))


def build_from_settings(config: Settings, *, client: Optional[NotionClient] = None) -> NotionSyncGateway:
    """
    Constructor "oficial" del gateway leyendo la configuración.

    Requeridas:
    - NOTION_KEY
    - NOTION_CASE_DATABASE_ID
    - NOTION_ALG_DATABASE_ID
    """
    missing = [
        name
        for name in ("NOTION_KEY", "NOTION_CASE_DATABASE_ID", "NOTION_ALG_DATABASE_ID")
        if not getattr(config, name)
    ]
    if missing:
        raise SyncConfigError(f"Faltan variables de entorno obligatorias: {', '.join(missing)}")

    if client is None:
        client = NotionClient(
            NotionCredentials(token=config.NOTION_KEY),
            base_url=config.NOTION_API_URL,
            notion_version=config.NOTION_VERSION,
            timeout_s=config.NOTION_TIMEOUT_S,
            max_retries=config.NOTION_MAX_RETRIES,
        )
    return NotionSyncGateway(
        client,
        case_database_id=config.NOTION_CASE_DATABASE_ID,
        alg_database_id=config.NOTION_ALG_DATABASE_ID,
        batch_size=config.BATCH_SIZE,
    )
