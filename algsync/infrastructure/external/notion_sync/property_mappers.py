"""
Mapeos entre registros del sync y propiedades de paginas de Notion.

Este es el punto a editar si cambian los nombres de las propiedades en las
bases de casos/algs. No realiza I/O.
"""

from __future__ import annotations

from typing import Any, Sequence

from algsync.application.dto.snapshot_dto import AlgorithmSnapshotDTO, CaseSnapshotDTO
from algsync.application.dto.update_dto import (
    FaveUpdateDTO,
    RankUpdateDTO,
    RelationUpdateDTO,
)
from algsync.application.interfaces.remote_sync_client import (
    ALG_RELATION_FIELD,
    FAVE_FIELD,
    ORIENTATION_RELATION_FIELD,
    RANK_FIELD,
)
from algsync.domain.entities.records import AlgorithmRecord, CaseRecord


class PropertyMappingError(ValueError):
    """El registro no corresponde al campo/propiedad pedido."""


def _title(content: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": content}}]}


def _rich_text(content: str, *, bold: bool = False) -> dict[str, Any]:
    item: dict[str, Any] = {"text": {"content": content}}
    if bold:
        item["annotations"] = {"bold": True}
    return {"rich_text": [item]}


def _relation(page_ids: Sequence[str]) -> dict[str, Any]:
    return {"relation": [{"id": page_id} for page_id in page_ids]}


def case_page_properties(case: CaseRecord) -> dict[str, Any]:
    """
    Propiedades de una pagina nueva en la base de casos.

    Los algs no se copian al caso: viven en la base de algs y se enlazan
    despues con `alg_relation`.
    """
    return {
        "name": _title(case.name),
        "algset": {"select": {"name": case.algset}},
        "caseid": _rich_text(case.case_id, bold=True),
        "catalog": _rich_text(case.catalog),
        # "" no es valido para propiedades url
        "video": {"url": case.video or None},
        "orientation": {"select": {"name": case.orientation}} if case.orientation else {"select": None},
    }


def alg_page_properties(record: AlgorithmRecord) -> dict[str, Any]:
    """Propiedades de una pagina nueva en la base de algs."""
    return {
        "alg": _title(record.alg),
        "rank": {"number": record.rank},
        "name": _rich_text(record.name),
        "case_relation": _relation([record.case_remote_id]),
    }


def update_properties(field: str, update: Any) -> dict[str, Any]:
    """Propiedades para un update parcial de `field`."""
    if field == RANK_FIELD and isinstance(update, RankUpdateDTO):
        return {RANK_FIELD: {"number": update.rank}}
    if field == FAVE_FIELD and isinstance(update, FaveUpdateDTO):
        return {FAVE_FIELD: {"checkbox": update.fave}}
    if field in (ALG_RELATION_FIELD, ORIENTATION_RELATION_FIELD) and isinstance(update, RelationUpdateDTO):
        return {field: _relation(update.members)}
    raise PropertyMappingError(f"Update no soportado: field={field}, tipo={type(update).__name__}")


def update_remote_id(update: Any) -> str:
    if isinstance(update, RelationUpdateDTO):
        return update.owner_remote_id
    return update.remote_id


def sorts_for(sort_keys: Sequence[str]) -> list[dict[str, str]]:
    return [{"property": key, "direction": "ascending"} for key in sort_keys]


def plain_text(page: dict[str, Any], prop: str) -> str:
    """Concatena el plain_text de una propiedad title/rich_text."""
    value = page.get("properties", {}).get(prop) or {}
    parts = value.get("title")
    if parts is None:
        parts = value.get("rich_text") or []
    return "".join(part.get("plain_text", "") for part in parts)


def page_to_case_snapshot(page: dict[str, Any]) -> CaseSnapshotDTO:
    return CaseSnapshotDTO(name=plain_text(page, "name"), remote_id=page["id"])


def page_to_alg_snapshot(page: dict[str, Any]) -> AlgorithmSnapshotDTO:
    properties = page.get("properties", {})
    return AlgorithmSnapshotDTO(
        alg=plain_text(page, "alg"),
        rank=(properties.get("rank") or {}).get("number"),
        name=plain_text(page, "name"),
        fave=bool((properties.get("fave") or {}).get("checkbox", False)),
        remote_id=page["id"],
    )
