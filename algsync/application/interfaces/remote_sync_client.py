"""
Interfaz del cliente remoto (base de datos tabular hospedada).

Este contrato existe para:
- Que los casos de uso no dependan de Notion/httpx directamente.
- Facilitar tests unitarios con un fake en memoria.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence, Set

# Colecciones
CASES = "cases"
ALGORITHMS = "algorithms"

# Campos con update parcial
RANK_FIELD = "rank"
FAVE_FIELD = "fave"
ALG_RELATION_FIELD = "alg_relation"
ORIENTATION_RELATION_FIELD = "allOrientations"


class RemoteSyncClient(Protocol):
    """
    Create/update/query sobre las dos colecciones remotas.

    Implementaciones:
    - NotionSyncGateway (httpx, en lotes).
    - Fake en memoria para tests.

    Cualquier error debe propagarse: un lote fallido aborta la corrida.
    """

    async def create(self, collection: str, records: Sequence[Any]) -> List[str]:
        """Crea paginas y retorna sus ids remotos en el mismo orden."""

    async def update(self, collection: str, field: str, records: Sequence[Any]) -> int:
        """Update parcial de `field` por remote_id. Retorna paginas actualizadas."""

    async def query_all(self, collection: str, sort_keys: Sequence[str]) -> List[Any]:
        """Consulta paginada de toda la coleccion, retornada como snapshots."""

    async def list_added_algsets(self) -> Set[str]:
        """Algsets que ya tienen casos en la coleccion de casos."""

    async def is_empty(self, collection: str) -> bool:
        """True si la coleccion no tiene paginas."""
