"""
DTOs de los snapshots locales (espejo cacheado de las paginas de Notion).

El JSON se serializa con `remoteId`; al leer tambien se acepta la clave
historica `pageId`.
"""
from typing import Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CaseSnapshotDTO(BaseModel):
    """Pagina de la base de casos: nombre + page id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Nombre del caso (ej. F2L01-a)")
    remote_id: str = Field(
        ...,
        validation_alias=AliasChoices("remoteId", "pageId", "remote_id"),
        serialization_alias="remoteId",
        description="Page id en Notion",
    )


class AlgorithmSnapshotDTO(BaseModel):
    """Pagina de la base de algs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    alg: str = Field(..., description="Texto del algoritmo")
    rank: int | None = Field(None, description="Rank actual en Notion")
    name: str = Field(..., description="Nombre del caso al que pertenece")
    fave: bool = Field(False, description="Checkbox de favorito")
    remote_id: str = Field(
        ...,
        validation_alias=AliasChoices("remoteId", "pageId", "remote_id"),
        serialization_alias="remoteId",
        description="Page id en Notion",
    )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.alg, self.name)


class FavoriteEntryDTO(BaseModel):
    """Entrada del archivo de favoritos (mantenido a mano)."""

    model_config = ConfigDict(frozen=True)

    alg: str
    algset: str
