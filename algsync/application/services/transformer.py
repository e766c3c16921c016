"""
Transforma casos del CSV en registros de algoritmos rankeados.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from algsync.application.dto.snapshot_dto import CaseSnapshotDTO
from algsync.domain.entities.records import AlgorithmRecord, CaseRecord
from algsync.shared.exceptions.domain import CaseSnapshotMissingException


def expand(
    case_records: Sequence[CaseRecord],
    case_snapshots: Iterable[CaseSnapshotDTO],
) -> List[AlgorithmRecord]:
    """
    Expande cada caso en sus algoritmos (rank 1..4) con el page id del caso.

    El join con el snapshot es por `name`, no por posicion: el CSV y la
    consulta a Notion no tienen por que venir en el mismo orden.

    Raises:
        CaseSnapshotMissingException: si un caso con algs no tiene page id.
    """
    page_ids = {snapshot.name: snapshot.remote_id for snapshot in case_snapshots}

    records: List[AlgorithmRecord] = []
    for case in case_records:
        algs = case.algs
        if not algs:
            continue

        case_remote_id = page_ids.get(case.name)
        if case_remote_id is None:
            raise CaseSnapshotMissingException(case.name)

        for rank, alg in enumerate(algs, start=1):
            records.append(
                AlgorithmRecord(alg=alg, rank=rank, name=case.name, case_remote_id=case_remote_id)
            )
    return records
