"""
Inicializacion del proceso de sync: logging y validacion de configuracion.
"""
from loguru import logger

from algsync.core.config import Settings, settings as default_settings


def on_startup(config: Settings = default_settings) -> int:
    """
    Configura el sink de archivo de loguru y valida la configuracion critica.
    Debe llamarse una vez al inicio del script. Retorna el id del sink.
    """
    sink_id = logger.add(
        config.LOG_FILE,
        rotation="10 MB",
        retention="10 days",
        level=config.LOG_LEVEL,
    )

    for warning in _validate_config(config):
        logger.warning(f"CONFIG: {warning}")

    return sink_id


def _validate_config(config: Settings) -> list[str]:
    """Retorna advertencias de configuracion (no lanza)."""
    warnings = []

    if not config.NOTION_KEY:
        warnings.append("NOTION_KEY no configurada - las llamadas a Notion fallaran")
    if not config.NOTION_CASE_DATABASE_ID:
        warnings.append("NOTION_CASE_DATABASE_ID no configurada")
    if not config.NOTION_ALG_DATABASE_ID:
        warnings.append("NOTION_ALG_DATABASE_ID no configurada")
    if not config.csv_path.exists():
        warnings.append(f"No existe el CSV de origen: {config.csv_path}")

    return warnings
