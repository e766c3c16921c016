"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .snapshot_dto import (
    AlgorithmSnapshotDTO,
    CaseSnapshotDTO,
    FavoriteEntryDTO,
)
from .update_dto import (
    FaveUpdateDTO,
    RankUpdateDTO,
    RelationUpdateDTO,
)

__all__ = [
    "AlgorithmSnapshotDTO",
    "CaseSnapshotDTO",
    "FavoriteEntryDTO",
    "FaveUpdateDTO",
    "RankUpdateDTO",
    "RelationUpdateDTO",
]
