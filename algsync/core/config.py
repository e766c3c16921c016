"""
Configuracion central del sync.
Gestiona variables de entorno y rutas de los archivos locales (CSV y snapshots).
"""
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Clase de configuracion del sync.
    Lee variables de entorno (o .env) y proporciona valores por defecto.

    - NOTION_*: credenciales y bases de datos destino
    - ASSET_DIR + *_FILE: CSV de origen y snapshots JSON
    - BATCH_SIZE: paginas por lote (menos paginas por vez para evitar errores)
    """

    # Notion
    NOTION_KEY: str = Field(default="")
    NOTION_CASE_DATABASE_ID: str = Field(default="")
    NOTION_ALG_DATABASE_ID: str = Field(default="")
    NOTION_API_URL: str = Field(default="https://api.notion.com/v1")
    NOTION_VERSION: str = Field(default="2022-06-28")
    NOTION_TIMEOUT_S: float = Field(default=30.0)
    NOTION_MAX_RETRIES: int = Field(default=4)

    # Archivos locales
    ASSET_DIR: str = Field(default="asset")
    CSV_FILE: str = Field(default="allAlgs.csv")
    CASE_SNAPSHOT_FILE: str = Field(default="casePageId.json")
    ALG_SNAPSHOT_FILE: str = Field(default="algPageInfo.json")
    FAVE_FILE: str = Field(default="algFave.json")

    # Sync
    BATCH_SIZE: int = Field(default=80, ge=1)
    ORIENTATION_ALGSET: str = Field(default="F2L")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/sync.log")

    @computed_field
    @property
    def csv_path(self) -> Path:
        return Path(self.ASSET_DIR) / self.CSV_FILE

    @computed_field
    @property
    def case_snapshot_path(self) -> Path:
        return Path(self.ASSET_DIR) / self.CASE_SNAPSHOT_FILE

    @computed_field
    @property
    def alg_snapshot_path(self) -> Path:
        return Path(self.ASSET_DIR) / self.ALG_SNAPSHOT_FILE

    @computed_field
    @property
    def fave_path(self) -> Path:
        return Path(self.ASSET_DIR) / self.FAVE_FILE

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
