"""
Archivos locales: CSV de origen y snapshots JSON.
"""
from algsync.infrastructure.storage.dataset_loader import load_cases
from algsync.infrastructure.storage.snapshot_store import SnapshotStore

__all__ = ["load_cases", "SnapshotStore"]
