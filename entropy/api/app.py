import logging
from typing import Optional, Tuple

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from entropy.api.middleware.session_middleware import session_middleware
from entropy.api.routes.auth_routes import router as auth_router
from entropy.api.routes.catalog_routes import router as catalog_router
from entropy.api.routes.enrollment_routes import router as enrollment_router
from entropy.api.routes.health_routes import router as health_router
from entropy.config.database import get_mongo_db, get_redis_client, inicializar_conexiones
from entropy.config.settings import settings
from entropy.errors import register_error_handlers
from entropy.repositories.cache_repository import CatalogCacheRepository
from entropy.repositories.module_repository import InMemoryModuleRepository, ModuleRepository
from entropy.repositories.mongo_repository import MongoModuleRepository, MongoUserRepository
from entropy.repositories.user_repository import InMemoryUserRepository, UserRepository
from entropy.services.auth_service import AuthService
from entropy.services.catalog_service import CatalogService
from entropy.services.enrollment_service import EnrollmentService


def build_repositories() -> Tuple[UserRepository, ModuleRepository, Optional[CatalogCacheRepository]]:
    """Elige el store según la config. Si Mongo no responde, cae a memoria."""
    status = inicializar_conexiones()

    if settings.store_backend == "mongo" and status["mongo"]:
        db = get_mongo_db()
        users, modules = MongoUserRepository(db), MongoModuleRepository(db)
    else:
        if settings.store_backend == "mongo":
            logging.warning("⚠️ MongoDB no disponible, usando almacenamiento en memoria")
        users, modules = InMemoryUserRepository(), InMemoryModuleRepository()

    cache = None
    if status["redis"]:
        cache = CatalogCacheRepository(get_redis_client(), ttl_seconds=settings.catalog_cache_ttl)
    return users, modules, cache


def create_app(users: UserRepository = None, modules: ModuleRepository = None,
               cache: CatalogCacheRepository = None, auth_service: AuthService = None) -> FastAPI:
    if users is None or modules is None:
        users, modules, cache = build_repositories()

    catalog_service = CatalogService(modules, cache=cache)
    catalog_service.seed()

    app = FastAPI(title="Entropy Productions API", version="1.0.0",
                  description="Catálogo de módulos, cuentas e inscripciones.")

    app.state.auth_service = auth_service or AuthService(users)
    app.state.catalog_service = catalog_service
    app.state.enrollment_service = EnrollmentService(users, modules, catalog=catalog_service)

    register_error_handlers(app)

    # Registrar middleware de sesión (Authorization: Bearer en rutas /modules)
    app.middleware("http")(session_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(auth_router)
    app.include_router(enrollment_router)
    return app
