# gapfinder/interface/api/config.py

import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ApiConfig:
    host: str
    port: int
    title: str
    version: str
    debug_mode: bool

    @classmethod
    def load(cls) -> 'ApiConfig':
        config = cls(
            host=os.getenv("GAPS_API_HOST", "0.0.0.0"),
            port=int(os.getenv("GAPS_API_PORT", 8080)),
            title=os.getenv("GAPS_API_TITLE", "Block Gaps Finder API"),
            version="0.1.0",
            debug_mode=os.getenv("GAPS_DEBUG", "False").lower() == "true"
        )

        logger.info("⚙️  Configuración de la API cargada:")
        logger.info(f"   URL: http://{config.host}:{config.port}")
        logger.info(f"   Título: {config.title} v{config.version}")
        logger.debug(f"   Debug: {config.debug_mode}")

        return config

# Instancia Singleton inmutable
settings = ApiConfig.load()
