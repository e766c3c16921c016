"""
Reconciliacion entre el dataset actual (CSV) y el ultimo estado conocido de
Notion (snapshots).

Todas las funciones son puras: reciben listas y retornan que crear/actualizar.
Aplicar los cambios es responsabilidad del caso de uso.

Politica de borrado: nunca se borran paginas. Un alg que ya no esta en el CSV
se "oculta" bajando su rank a STALE_RANK.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from algsync.application.dto.snapshot_dto import (
    AlgorithmSnapshotDTO,
    CaseSnapshotDTO,
    FavoriteEntryDTO,
)
from algsync.application.dto.update_dto import (
    FaveUpdateDTO,
    RankUpdateDTO,
    RelationUpdateDTO,
)
from algsync.domain.entities.records import STALE_RANK, AlgorithmRecord, CaseRecord

# Separador de variantes de orientacion en el nombre del caso (ej. "F2L01-a")
ORIENTATION_SEPARATOR = "-"


@dataclass(frozen=True)
class AlgorithmDiff:
    """Resultado de comparar algs actuales vs snapshot."""

    to_create: List[AlgorithmRecord] = field(default_factory=list)
    to_update: List[RankUpdateDTO] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_update


def diff_algorithms(
    current: Sequence[AlgorithmRecord],
    remote: Sequence[AlgorithmSnapshotDTO],
) -> AlgorithmDiff:
    """
    Decide que algs crear y que ranks actualizar.

    - to_create: algs actuales cuyo (alg, name) no existe en el snapshot,
      en el orden del CSV.
    - to_update: se recorre el snapshot (no el CSV):
        * sin alg actual -> rank STALE_RANK (salvo que ya lo tenga)
        * con alg actual y rank distinto -> rank nuevo
    """
    current_by_key: Dict[Tuple[str, str], AlgorithmRecord] = {}
    for record in current:
        # Algs duplicados en un mismo caso no estan soportados; gana el primero
        current_by_key.setdefault(record.key, record)
    remote_keys = {snapshot.key for snapshot in remote}

    to_create = [record for record in current if record.key not in remote_keys]

    to_update: List[RankUpdateDTO] = []
    for snapshot in remote:
        record = current_by_key.get(snapshot.key)
        if record is None:
            if snapshot.rank != STALE_RANK:
                to_update.append(RankUpdateDTO(rank=STALE_RANK, remote_id=snapshot.remote_id))
        elif record.rank != snapshot.rank:
            to_update.append(RankUpdateDTO(rank=record.rank, remote_id=snapshot.remote_id))

    return AlgorithmDiff(to_create=to_create, to_update=to_update)


def diff_favorites(
    remote: Iterable[AlgorithmSnapshotDTO],
    favorites: Sequence[FavoriteEntryDTO],
) -> List[FaveUpdateDTO]:
    """
    Sincroniza el checkbox de favorito en ambos sentidos.

    Un alg es favorito si existe una entrada con el mismo texto exacto cuyo
    `algset` esta contenido en el nombre del caso. Solo se emite update cuando
    el valor calculado difiere del cacheado.
    """
    updates: List[FaveUpdateDTO] = []
    for snapshot in remote:
        is_fave = any(
            entry.alg == snapshot.alg and entry.algset in snapshot.name
            for entry in favorites
        )
        if is_fave != snapshot.fave:
            updates.append(FaveUpdateDTO(fave=is_fave, remote_id=snapshot.remote_id))
    return updates


def build_orientation_groups(
    case_snapshots: Sequence[CaseSnapshotDTO],
    algset_tag: str,
) -> List[RelationUpdateDTO]:
    """
    Agrupa las variantes de orientacion con su caso principal.

    Principal: nombre contiene `algset_tag` y no contiene "-".
    Miembros: todos los casos cuyo nombre contiene el nombre del principal
    (incluido el propio principal). Reaplicar el resultado es idempotente.
    """
    groups: List[RelationUpdateDTO] = []
    for owner in case_snapshots:
        if algset_tag not in owner.name or ORIENTATION_SEPARATOR in owner.name:
            continue
        members = [case.remote_id for case in case_snapshots if owner.name in case.name]
        groups.append(RelationUpdateDTO(owner_remote_id=owner.remote_id, members=members))
    return groups


def build_case_alg_relations(
    case_snapshots: Sequence[CaseSnapshotDTO],
    alg_snapshots: Sequence[AlgorithmSnapshotDTO],
) -> List[RelationUpdateDTO]:
    """
    Relacion caso -> algs siguiendo el orden del snapshot de algs
    (ya viene ordenado por name, rank desde la consulta).

    Emite un registro por caso aunque no tenga algs, para limpiar relaciones viejas.
    """
    algs_by_case: Dict[str, List[str]] = {}
    for snapshot in alg_snapshots:
        algs_by_case.setdefault(snapshot.name, []).append(snapshot.remote_id)

    return [
        RelationUpdateDTO(owner_remote_id=case.remote_id, members=list(algs_by_case.get(case.name, [])))
        for case in case_snapshots
    ]


def added_algsets_from_names(first_case_names: Iterable[str]) -> Set[str]:
    """
    Deriva los algsets ya cargados a partir de los casos "...01".

    Ej: ["F2L01", "PLL01"] -> {"F2L", "PLL"}
    """
    return {name[:-2] for name in first_case_names if len(name) > 2}


def filter_new_cases(
    case_records: Sequence[CaseRecord],
    added_algsets: Set[str],
) -> List[CaseRecord]:
    """Descarta los casos de algsets que ya existen en la base de casos."""
    return [case for case in case_records if case.algset not in added_algsets]
