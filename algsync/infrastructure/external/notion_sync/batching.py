"""
Ejecucion en lotes de tamaño fijo.

Dentro de un lote las llamadas van en paralelo (asyncio.gather); los lotes
se ejecutan uno tras otro. Menos paginas por vez evita errores de Notion.
Un lote con errores se espera completo antes de abortar.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

from loguru import logger

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_BATCH_SIZE = 80


async def run_in_batches(
    func: Callable[[T], Awaitable[R]],
    items: Sequence[T],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> List[R]:
    """
    Aplica `func` a cada item, `batch_size` items a la vez.

    Retorna los resultados en el orden de `items`. Si una llamada falla se
    espera al resto del lote (ninguna queda corriendo), se propaga el primer
    error y los lotes siguientes no se ejecutan.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size debe ser >= 1 (recibido {batch_size})")

    results: List[R] = []
    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        tasks = [asyncio.ensure_future(func(item)) for item in batch]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        errors = [o for o in outcomes if isinstance(o, BaseException)]
        if errors:
            logger.error(
                f"Lote {start // batch_size + 1}: {len(errors)}/{len(batch)} llamadas fallaron"
            )
            raise errors[0]

        results.extend(outcomes)
        logger.debug(f"Lote {start // batch_size + 1}: {len(results)}/{len(items)}")
    return results
