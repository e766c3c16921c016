"""
Entidades de dominio.
"""
from algsync.domain.entities.records import (
    STALE_RANK,
    AlgorithmRecord,
    CaseRecord,
)

__all__ = ["STALE_RANK", "AlgorithmRecord", "CaseRecord"]
