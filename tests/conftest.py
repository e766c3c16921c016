"""
Configuración de fixtures para pytest.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from algsync.application.dto.snapshot_dto import AlgorithmSnapshotDTO, CaseSnapshotDTO
from algsync.application.interfaces.remote_sync_client import (
    CASES,
    FAVE_FIELD,
    RANK_FIELD,
)
from algsync.application.services.reconciler import added_algsets_from_names
from algsync.infrastructure.storage.snapshot_store import SnapshotStore


class FakeRemoteClient:
    """
    RemoteSyncClient en memoria.

    Registra cada llamada en `calls` y aplica los cambios para que
    `query_all` refleje el estado remoto como lo haría Notion.
    """

    def __init__(
        self,
        cases: Optional[List[CaseSnapshotDTO]] = None,
        algs: Optional[List[AlgorithmSnapshotDTO]] = None,
    ) -> None:
        self.cases: List[CaseSnapshotDTO] = list(cases or [])
        self.algs: List[AlgorithmSnapshotDTO] = list(algs or [])
        self.relations: Dict[Tuple[str, str], List[str]] = {}
        self.calls: List[tuple] = []
        self.fail_on_create: Optional[Exception] = None
        self._next_id = 0

    def _new_id(self) -> str:
        self._next_id += 1
        return f"page-{self._next_id}"

    def mutations(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in ("create", "update") and call[-1]]

    async def create(self, collection: str, records: Sequence[Any]) -> List[str]:
        self.calls.append(("create", collection, list(records)))
        if self.fail_on_create is not None and records:
            raise self.fail_on_create
        ids = []
        for record in records:
            page_id = self._new_id()
            ids.append(page_id)
            if collection == CASES:
                self.cases.append(CaseSnapshotDTO(name=record.name, remote_id=page_id))
            else:
                self.algs.append(
                    AlgorithmSnapshotDTO(
                        alg=record.alg, rank=record.rank, name=record.name, fave=False, remote_id=page_id
                    )
                )
        return ids

    async def update(self, collection: str, field: str, records: Sequence[Any]) -> int:
        self.calls.append(("update", collection, field, list(records)))
        for record in records:
            if field in (RANK_FIELD, FAVE_FIELD):
                value = record.rank if field == RANK_FIELD else record.fave
                self.algs = [
                    alg.model_copy(update={field: value}) if alg.remote_id == record.remote_id else alg
                    for alg in self.algs
                ]
            else:
                self.relations[(field, record.owner_remote_id)] = list(record.members)
        return len(records)

    async def query_all(self, collection: str, sort_keys: Sequence[str]) -> List[Any]:
        self.calls.append(("query_all", collection, tuple(sort_keys)))
        if collection == CASES:
            return sorted(self.cases, key=lambda c: c.name)
        return sorted(self.algs, key=lambda a: (a.name, a.rank or 0))

    async def list_added_algsets(self):
        self.calls.append(("list_added_algsets",))
        return added_algsets_from_names(c.name for c in self.cases if c.name.endswith("01"))

    async def is_empty(self, collection: str) -> bool:
        return not (self.cases if collection == CASES else self.algs)


@pytest.fixture
def fake_client() -> FakeRemoteClient:
    return FakeRemoteClient()


@pytest.fixture
def store(tmp_path) -> SnapshotStore:
    """SnapshotStore sobre un directorio temporal (sin archivos)."""
    return SnapshotStore(
        tmp_path / "casePageId.json",
        tmp_path / "algPageInfo.json",
        tmp_path / "algFave.json",
    )
