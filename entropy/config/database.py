import logging
from typing import Optional

import redis
from pymongo import MongoClient
from pymongo.database import Database

from entropy.config.settings import settings

_mongo_client: Optional[MongoClient] = None
_redis_client: Optional[redis.Redis] = None


# ==================================
# 🟢 MongoDB
# ==================================
def get_mongo_db(uri: str = None, db_name: str = None) -> Database:
    """Devuelve la base de Mongo configurada; el cliente se crea una sola vez."""
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = MongoClient(uri or settings.mongo_uri, serverSelectionTimeoutMS=5000)
    return _mongo_client[db_name or settings.mongo_database]


def probar_mongo() -> bool:
    """Hace ping a Mongo. Devuelve False (y loguea) si no está disponible."""
    try:
        db = get_mongo_db()
        db.client.admin.command("ping")
        logging.info(f"🟢 Mongo conectado a la base: {db.name}")
        return True
    except Exception as e:
        logging.error(f"❌ Error al conectar a MongoDB: {e}")
        return False


# ==================================
# ⚡ Redis
# ==================================
def get_redis_client() -> Optional[redis.Redis]:
    """Cliente Redis compartido, o None si no hay REDIS_URI."""
    global _redis_client
    if not settings.redis_uri:
        return None
    if _redis_client is None:
        # el cliente es thread-safe y se reutiliza
        _redis_client = redis.from_url(settings.redis_uri, socket_timeout=2)
    return _redis_client


def probar_redis() -> bool:
    r = get_redis_client()
    if r is None:
        logging.info("⚡ Redis no configurado, caché del catálogo deshabilitada.")
        return False
    try:
        r.ping()
        logging.info("⚡ Redis conectado.")
        return True
    except Exception as e:
        logging.error(f"❌ Error al conectar a Redis: {e}")
        return False


def inicializar_conexiones() -> dict:
    """Prueba las conexiones configuradas y devuelve cuáles respondieron."""
    logging.info("--- Probando conexiones ---")
    status = {
        "mongo": probar_mongo() if settings.store_backend == "mongo" else False,
        "redis": probar_redis(),
    }
    logging.info("---------------------------")
    return status
