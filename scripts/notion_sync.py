"""
CLI: CSV de algoritmos -> Notion (casos + algs).

Variables de entorno requeridas (o .env):
  - NOTION_KEY
  - NOTION_CASE_DATABASE_ID
  - NOTION_ALG_DATABASE_ID

Ejecución:
  python scripts/notion_sync.py              # sync incremental (CSV actualizado)
  python scripts/notion_sync.py --refresh    # re-consulta algDb antes de comparar
  python scripts/notion_sync.py --init       # base nueva o algset nuevo
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin instalar el paquete.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

load_dotenv(_REPO_ROOT / ".env", override=False)

from algsync.application.use_cases.sync_use_cases import CubeAlgSyncUseCases
from algsync.core.config import Settings
from algsync.core.events import on_startup
from algsync.infrastructure.external.notion_sync.notion_client import NotionApiError
from algsync.infrastructure.external.notion_sync.sync_gateway import (
    SyncConfigError,
    build_from_settings,
)
from algsync.infrastructure.storage.dataset_loader import load_cases
from algsync.infrastructure.storage.snapshot_store import SnapshotStore
from algsync.shared.exceptions.base import AppException


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync de algoritmos CSV -> Notion")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Inicializa caseDb y algDb (omite algsets ya cargados).",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help=(
            "Re-consulta algDb antes de comparar. Usar si la corrida anterior "
            "se cortó después de crear algs."
        ),
    )
    parser.add_argument(
        "--orientation-algset",
        default=None,
        help="Algset cuyas orientaciones se relacionan en --init (default: ORIENTATION_ALGSET).",
    )
    return parser


async def run(args: argparse.Namespace, config: Settings) -> None:
    # CSV primero: un error de parseo aborta antes de tocar Notion
    cases = load_cases(config.csv_path)
    store = SnapshotStore(config.case_snapshot_path, config.alg_snapshot_path, config.fave_path)

    async with build_from_settings(config) as gateway:
        use_cases = CubeAlgSyncUseCases(gateway, store)
        if args.init:
            result = await use_cases.initialize(
                cases, orientation_algset=args.orientation_algset or config.ORIENTATION_ALGSET
            )
        else:
            result = await use_cases.sync_incremental(cases, refresh_first=args.refresh)

    logger.success(f"Sync OK: {result}")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = Settings()
    on_startup(config)

    try:
        asyncio.run(run(args, config))
    except (AppException, NotionApiError, SyncConfigError) as e:
        logger.error(f"Sync abortado: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
