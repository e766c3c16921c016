"""
Registros efimeros derivados del CSV de origen.

Se recalculan en cada corrida; no tienen I/O para poder testearlos facilmente.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Rank centinela para algs que ya no existen en el CSV (se ocultan, no se borran)
STALE_RANK = 5


@dataclass(frozen=True)
class CaseRecord:
    """
    Caso del CSV (una fila).

    `name` codifica algset + variante + orientacion (ej. "F2L01-a") y es
    unico dentro de una corrida.
    """

    name: str
    algset: str
    case_id: str = ""
    catalog: str = ""
    alg1: str = ""
    alg2: str = ""
    alg3: str = ""
    alg4: str = ""
    video: str = ""
    video_img: str = ""
    color: str = ""
    orientation: str = ""

    @property
    def algs(self) -> Tuple[str, ...]:
        """Algoritmos no vacios en el orden de los campos alg1..alg4."""
        return tuple(a for a in (self.alg1, self.alg2, self.alg3, self.alg4) if a)


@dataclass(frozen=True)
class AlgorithmRecord:
    """
    Algoritmo de un caso con su rank (1-based entre los algs no vacios).

    Identidad: el par (alg, name).
    """

    alg: str
    rank: int
    name: str
    case_remote_id: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.alg, self.name)
