"""
Servicios de aplicacion.

Logica pura (sin I/O) para transformar el CSV y reconciliarlo con los snapshots.
"""
from algsync.application.services.transformer import expand
from algsync.application.services.reconciler import (
    AlgorithmDiff,
    added_algsets_from_names,
    build_case_alg_relations,
    build_orientation_groups,
    diff_algorithms,
    diff_favorites,
    filter_new_cases,
)

__all__ = [
    # Transformacion
    "expand",
    # Reconciliacion
    "AlgorithmDiff",
    "diff_algorithms",
    "diff_favorites",
    "build_orientation_groups",
    "build_case_alg_relations",
    "filter_new_cases",
    "added_algsets_from_names",
]
