"""
DTOs de actualizaciones parciales hacia Notion.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RankUpdateDTO(BaseModel):
    """Nuevo rank para una pagina de alg."""

    model_config = ConfigDict(frozen=True)

    rank: int
    remote_id: str


class FaveUpdateDTO(BaseModel):
    """Nuevo valor del checkbox de favorito para una pagina de alg."""

    model_config = ConfigDict(frozen=True)

    fave: bool
    remote_id: str


class RelationUpdateDTO(BaseModel):
    """
    Relacion a escribir en la pagina `owner_remote_id`.

    Una lista de miembros vacia limpia la relacion.
    """

    model_config = ConfigDict(frozen=True)

    owner_remote_id: str
    members: List[str] = Field(default_factory=list)
