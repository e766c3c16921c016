"""
Excepciones relacionadas con los datos locales (CSV y snapshots).
"""
from pathlib import Path
from typing import Optional

from algsync.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details
        )


class DatasetParseException(DomainException):
    """Excepción cuando el CSV de origen no se puede interpretar."""

    def __init__(self, path: Path, reason: str, line: Optional[int] = None):
        location = f"{path}:{line}" if line is not None else str(path)
        super().__init__(
            message=f"CSV inválido ({location}): {reason}",
            error_code="DATASET_PARSE_ERROR",
            details={"path": str(path), "line": line, "reason": reason}
        )


class SnapshotFormatException(DomainException):
    """Excepción cuando un snapshot JSON está corrupto o mal formado."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            message=f"Snapshot inválido ({path}): {reason}",
            error_code="SNAPSHOT_FORMAT_ERROR",
            details={"path": str(path), "reason": reason}
        )


class CaseSnapshotMissingException(DomainException):
    """
    Excepción cuando un caso del CSV no tiene page id en el snapshot de casos.

    Normalmente indica que el snapshot de casos está desactualizado
    (hay que volver a consultar la base de casos).
    """

    def __init__(self, case_name: str):
        super().__init__(
            message=f"El caso '{case_name}' no existe en el snapshot de casos",
            error_code="CASE_SNAPSHOT_MISSING",
            details={"case_name": case_name}
        )
        self.case_name = case_name
