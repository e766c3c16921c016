"""
Lectura del CSV de casos (generado por el scraper de SpeedCubeDB).

Columnas: name, algset, caseid, catalog, alg1..alg4, video, videoimg, color, orientation.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Set

from loguru import logger

from algsync.domain.entities.records import CaseRecord
from algsync.shared.exceptions.domain import DatasetParseException

REQUIRED_COLUMNS = ("name", "algset")

# columna CSV -> campo de CaseRecord
COLUMN_FIELDS = {
    "name": "name",
    "algset": "algset",
    "caseid": "case_id",
    "catalog": "catalog",
    "alg1": "alg1",
    "alg2": "alg2",
    "alg3": "alg3",
    "alg4": "alg4",
    "video": "video",
    "videoimg": "video_img",
    "color": "color",
    "orientation": "orientation",
}


def load_cases(path: Path | str) -> List[CaseRecord]:
    """
    Lee el CSV y retorna los casos en el orden del archivo.

    Raises:
        DatasetParseException: archivo inexistente, columnas obligatorias
            faltantes, fila sin nombre o nombre duplicado.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetParseException(path, "el archivo no existe")

    cases: List[CaseRecord] = []
    seen: Set[str] = set()
    try:
        # utf-8-sig: los CSV exportados desde Excel traen BOM
        with path.open(newline="", encoding="utf-8-sig") as fh:
            reader = csv.DictReader(fh)
            header = [column.strip() for column in reader.fieldnames or []]
            reader.fieldnames = header
            missing = [column for column in REQUIRED_COLUMNS if column not in header]
            if missing:
                raise DatasetParseException(path, f"faltan columnas: {', '.join(missing)}")

            for row in reader:
                values = {
                    field: (row.get(column) or "").strip()
                    for column, field in COLUMN_FIELDS.items()
                }
                line = reader.line_num
                if not values["name"]:
                    raise DatasetParseException(path, "fila sin 'name'", line=line)
                if values["name"] in seen:
                    raise DatasetParseException(path, f"caso duplicado '{values['name']}'", line=line)
                seen.add(values["name"])
                cases.append(CaseRecord(**values))
    except (csv.Error, UnicodeDecodeError) as e:
        raise DatasetParseException(path, str(e)) from e

    logger.info(f"{len(cases)} casos leidos de {path}")
    return cases
