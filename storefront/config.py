"""
Configuration for the storefront service.

Settings are read from environment variables when this module is
imported.  Every field has a default so the service starts with no
configuration at all; tests build their own ``Settings`` pointing at a
temporary data directory and pass it to ``create_app``.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Storefront API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Directory holding products.json, users.json and orders.json.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Served under /static when the directory exists.
    static_dir: str = os.getenv("STATIC_DIR", "public")

    # Comma-separated list, "*" allows any origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
