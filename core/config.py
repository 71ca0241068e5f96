# core/config.py

"""Application configuration loaded from environment variables.

Settings use the `EDUCONTROL_` prefix and may also be placed in a local `.env` file.
"""

import os

from pydantic import Field
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Storage
    data_dir: str = Field(
        default=os.path.join(os.path.expanduser("~"), ".educontrol"),
        description="Directory holding the persisted snapshot",
    )
    state_file: str = Field(
        default="educontrol_pro_data_v2.json",
        description="File name of the persisted snapshot inside data_dir",
    )

    # Export
    export_dir: str = Field(
        default=os.path.join(os.path.expanduser("~"), "Documents", "EduControl"),
        description="Default directory for exported reports",
    )
    rows_per_page: int = Field(
        default=40,
        ge=1,
        description="Rows per page in exported PDF table documents",
    )

    # Display
    default_portal_url: str = Field(
        default="SME-COORDENACAO.GO.GOV.BR",
        description="Portal address shown when none has been configured",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "EDUCONTROL_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def state_path(self) -> str:
        return os.path.join(os.path.expanduser(self.data_dir), self.state_file)


# Singleton pattern
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the application configuration singleton.

    Returns:
        AppConfig: Application configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig()
    return _config
