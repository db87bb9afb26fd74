# entropy/repositories/cache_repository.py
import json
import logging
from typing import Any, Dict, Optional

import redis

CATALOG_KEY = "cache:catalog"


class CatalogCacheRepository:
    """
    Caché del catálogo agrupado en Redis (cache-aside).
    Los errores de Redis se loguean y se tratan como cache miss: nunca rompen la API.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = 30):
        self.client = client
        self.ttl_seconds = ttl_seconds

    def get_catalog(self) -> Optional[Dict[str, Any]]:
        try:
            data = self.client.get(CATALOG_KEY)
        except redis.RedisError as e:
            logging.warning(f"[cache] No se pudo leer el catálogo de Redis: {e}")
            return None
        if not data:
            return None
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            catalog = json.loads(data)
        except ValueError as e:
            catalog = None
            logging.warning(f"[cache] Valor corrupto en {CATALOG_KEY}, se descarta: {e}")
        if not isinstance(catalog, dict):
            # valor ajeno o corrupto: se borra y se trata como cache miss
            self.invalidate_catalog()
            return None
        return catalog

    def set_catalog(self, catalog: Dict[str, Any]):
        try:
            self.client.set(CATALOG_KEY, json.dumps(catalog), ex=self.ttl_seconds)
        except redis.RedisError as e:
            logging.warning(f"[cache] No se pudo guardar el catálogo en Redis: {e}")

    def invalidate_catalog(self):
        try:
            self.client.delete(CATALOG_KEY)
        except redis.RedisError as e:
            logging.warning(f"[cache] No se pudo invalidar el catálogo: {e}")
