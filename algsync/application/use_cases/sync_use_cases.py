"""
Casos de uso del sync CSV -> Notion.

Cada fase es: funcion pura de diff (reconciler) + paso de aplicacion
(RemoteSyncClient, en lotes). Si un lote falla la excepcion se propaga y la
corrida se aborta; los snapshots solo se reescriben tras re-consultar Notion.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from algsync.application.dto.snapshot_dto import (
    AlgorithmSnapshotDTO,
    CaseSnapshotDTO,
    FavoriteEntryDTO,
)
from algsync.application.interfaces.remote_sync_client import (
    ALG_RELATION_FIELD,
    ALGORITHMS,
    CASES,
    FAVE_FIELD,
    ORIENTATION_RELATION_FIELD,
    RANK_FIELD,
    RemoteSyncClient,
)
from algsync.application.services.reconciler import (
    build_case_alg_relations,
    build_orientation_groups,
    diff_algorithms,
    diff_favorites,
    filter_new_cases,
)
from algsync.application.services.transformer import expand
from algsync.domain.entities.records import CaseRecord
from algsync.infrastructure.storage.snapshot_store import SnapshotStore

CASE_SORT_KEYS = ("name",)
ALG_SORT_KEYS = ("name", "rank")


@dataclass(frozen=True)
class InitializeResult:
    created_cases: int
    orientation_groups: int
    created_algs: int


@dataclass(frozen=True)
class SyncResult:
    created_algs: int
    updated_ranks: int
    updated_faves: int
    updated_relations: int


class CubeAlgSyncUseCases:
    """
    Orquestador de las dos secuencias del sync.

    - initialize: base nueva o algset nuevo (crea casos y algs).
    - sync_incremental: el CSV cambio (crea algs nuevos, corrige ranks y faves).
    """

    def __init__(self, client: RemoteSyncClient, store: SnapshotStore) -> None:
        self.client = client
        self.store = store

    async def refresh_case_snapshot(self) -> List[CaseSnapshotDTO]:
        """Consulta la base de casos y reescribe el snapshot."""
        snapshots = await self.client.query_all(CASES, CASE_SORT_KEYS)
        self.store.write_cases(snapshots)
        return snapshots

    async def refresh_alg_snapshot(self) -> List[AlgorithmSnapshotDTO]:
        """Consulta la base de algs y reescribe el snapshot. Costoso."""
        logger.info("Start query AlgDb...")
        snapshots = await self.client.query_all(ALGORITHMS, ALG_SORT_KEYS)
        self.store.write_algorithms(snapshots)
        logger.info("AlgDb query is done!")
        return snapshots

    async def initialize(
        self,
        case_records: Sequence[CaseRecord],
        orientation_algset: str = "F2L",
    ) -> InitializeResult:
        """
        Inicializa las bases de casos y algs.

        Los casos de algsets ya cargados se omiten, por lo que se puede
        re-ejecutar para agregar un algset nuevo.
        """
        if await self.client.is_empty(CASES):
            added_algsets = set()
        else:
            added_algsets = await self.client.list_added_algsets()
        if added_algsets:
            logger.info(f"Algsets ya cargados: {', '.join(sorted(added_algsets))}")
        new_cases = filter_new_cases(case_records, added_algsets)

        logger.info(f"Adding {len(new_cases)} cases to caseDb...")
        await self.client.create(CASES, new_cases)
        logger.success(f"{len(new_cases)} cases added!")

        case_snapshots = await self.refresh_case_snapshot()

        # Relacion de orientaciones con la orientacion principal (idempotente)
        groups = build_orientation_groups(case_snapshots, orientation_algset)
        logger.info(f"Updating allOrientations for {len(groups)} {orientation_algset} cases...")
        await self.client.update(CASES, ORIENTATION_RELATION_FIELD, groups)
        logger.success("allOrientations updated!")

        alg_records = expand(new_cases, case_snapshots)
        logger.info(f"Adding {len(alg_records)} algs to algDb...")
        await self.client.create(ALGORITHMS, alg_records)
        logger.success(f"{len(alg_records)} algs added!")

        await self.refresh_alg_snapshot()

        return InitializeResult(
            created_cases=len(new_cases),
            orientation_groups=len(groups),
            created_algs=len(alg_records),
        )

    async def sync_incremental(
        self,
        case_records: Sequence[CaseRecord],
        favorites: Optional[Sequence[FavoriteEntryDTO]] = None,
        refresh_first: bool = False,
    ) -> SyncResult:
        """
        Sincroniza cambios del CSV sobre bases ya inicializadas.

        Args:
            case_records: casos del CSV
            favorites: favoritos; si es None se leen del snapshot store
            refresh_first: re-consultar la base de algs antes de comparar
                (usar si la corrida anterior se corto tras crear algs)
        """
        if refresh_first:
            alg_snapshots = await self.refresh_alg_snapshot()
        else:
            alg_snapshots = self.store.read_algorithms()
        case_snapshots = self.store.read_cases()
        if favorites is None:
            favorites = self.store.read_favorites()

        alg_records = expand(case_records, case_snapshots)
        diff = diff_algorithms(alg_records, alg_snapshots)

        logger.info(f"Updating {len(diff.to_update)} alg ranks...")
        await self.client.update(ALGORITHMS, RANK_FIELD, diff.to_update)
        logger.success("Updating rank is done!")

        logger.info(f"Creating {len(diff.to_create)} items...")
        await self.client.create(ALGORITHMS, diff.to_create)
        logger.success("Creating is done!")

        fave_updates = diff_favorites(alg_snapshots, favorites)
        logger.info(f"Updating {len(fave_updates)} alg faves...")
        await self.client.update(ALGORITHMS, FAVE_FIELD, fave_updates)
        logger.success("Updating fave is done!")

        fresh_alg_snapshots = await self.refresh_alg_snapshot()

        relations = build_case_alg_relations(case_snapshots, fresh_alg_snapshots)
        logger.info("Updating alg_relation for caseDb...")
        await self.client.update(CASES, ALG_RELATION_FIELD, relations)
        logger.success("Alg_relation updated for caseDb!")

        return SyncResult(
            created_algs=len(diff.to_create),
            updated_ranks=len(diff.to_update),
            updated_faves=len(fave_updates),
            updated_relations=len(relations),
        )
