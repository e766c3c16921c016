"""
Snapshots JSON del ultimo estado conocido de Notion.

- casePageId.json:  [{name, remoteId}]
- algPageInfo.json: [{alg, rank, name, fave, remoteId}]
- algFave.json:     [{alg, algset}]  (mantenido a mano)

Solo se refrescan despues de volver a consultar Notion.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import List, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from algsync.application.dto.snapshot_dto import (
    AlgorithmSnapshotDTO,
    CaseSnapshotDTO,
    FavoriteEntryDTO,
)
from algsync.shared.exceptions.domain import SnapshotFormatException

M = TypeVar("M", bound=BaseModel)


class SnapshotStore:
    """
    Lectura/escritura de los snapshots locales.

    Uso:
        store = SnapshotStore(case_path, alg_path, fave_path)
        cases = store.read_cases()
        store.write_algorithms(alg_snapshots)
    """

    def __init__(self, case_path: Path | str, alg_path: Path | str, fave_path: Path | str) -> None:
        self.case_path = Path(case_path)
        self.alg_path = Path(alg_path)
        self.fave_path = Path(fave_path)

    def read_cases(self) -> List[CaseSnapshotDTO]:
        return self._read(self.case_path, CaseSnapshotDTO)

    def write_cases(self, snapshots: Sequence[CaseSnapshotDTO]) -> None:
        self._write(self.case_path, snapshots)

    def read_algorithms(self) -> List[AlgorithmSnapshotDTO]:
        return self._read(self.alg_path, AlgorithmSnapshotDTO)

    def write_algorithms(self, snapshots: Sequence[AlgorithmSnapshotDTO]) -> None:
        self._write(self.alg_path, snapshots)

    def read_favorites(self) -> List[FavoriteEntryDTO]:
        if not self.fave_path.exists():
            logger.warning(f"No existe el archivo de favoritos {self.fave_path}; se asume vacio")
            return []
        return self._read(self.fave_path, FavoriteEntryDTO)

    def _read(self, path: Path, model: Type[M]) -> List[M]:
        if not path.exists():
            # Primera corrida: aun no se consulto Notion
            logger.info(f"Snapshot {path} no existe; se asume vacio")
            return []

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SnapshotFormatException(path, f"JSON invalido: {e}") from e

        try:
            return TypeAdapter(List[model]).validate_python(raw)
        except ValidationError as e:
            raise SnapshotFormatException(path, str(e)) from e

    def _write(self, path: Path, snapshots: Sequence[BaseModel]) -> None:
        """Escritura atomica: archivo temporal en el mismo directorio + replace."""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = [snapshot.model_dump(by_alias=True) for snapshot in snapshots]

        with NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            try:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            except Exception:
                tmp.close()
                os.unlink(tmp_name)
                raise
        os.replace(tmp_name, path)
        logger.info(f"Snapshot {path} actualizado ({len(data)} registros)")
