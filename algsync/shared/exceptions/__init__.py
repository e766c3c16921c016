"""
Excepciones de la aplicacion.
"""
from algsync.shared.exceptions.base import AppException
from algsync.shared.exceptions.domain import (
    CaseSnapshotMissingException,
    DatasetParseException,
    DomainException,
    SnapshotFormatException,
)

__all__ = [
    "AppException",
    "DomainException",
    "DatasetParseException",
    "SnapshotFormatException",
    "CaseSnapshotMissingException",
]
