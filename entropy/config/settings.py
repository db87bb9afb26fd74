# entropy/config/settings.py
import os
import logging
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://entropyproductions.site",
    "https://www.entropyproductions.site",
]


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    """Valores leídos del entorno (.env incluido) al importar el módulo."""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.port = int(os.getenv("ENTROPY_PORT", 3000))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # 🔐 Tokens
        self.jwt_secret = os.getenv("JWT_SECRET", "entropy-productions-secret-key-2024")
        self.jwt_algorithm = "HS256"
        self.token_ttl_days = int(os.getenv("TOKEN_TTL_DAYS", 7))

        # 🟢 Persistencia: si hay MONGO_URI usamos Mongo, si no memoria
        self.mongo_uri = os.getenv("MONGO_URI")
        self.mongo_database = os.getenv("MONGO_DATABASE", "entropy-productions")
        self.store_backend = os.getenv("STORE_BACKEND") or ("mongo" if self.mongo_uri else "memory")

        # ⚡ Redis (opcional, solo caché del catálogo)
        self.redis_uri = os.getenv("REDIS_URI")
        self.catalog_cache_ttl = int(os.getenv("CATALOG_CACHE_TTL", 30))

        cors = os.getenv("CORS_ORIGINS")
        self.cors_origins = _split_csv(cors) if cors else list(DEFAULT_CORS_ORIGINS)


settings = Settings()


def setup_logging(level: str = None):
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
