"""
Casos de uso del sync.
"""
from algsync.application.use_cases.sync_use_cases import (
    CubeAlgSyncUseCases,
    InitializeResult,
    SyncResult,
)

__all__ = ["CubeAlgSyncUseCases", "InitializeResult", "SyncResult"]
