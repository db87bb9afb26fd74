# entropy/services/catalog_service.py
import logging
from typing import Any, Dict, List, Optional

from entropy.config.seed_modules import seed_modules
from entropy.errors import NotFoundError
from entropy.models.module_model import CATEGORY_ORDER, MAX_MODULE_ID, Module
from entropy.repositories.cache_repository import CatalogCacheRepository
from entropy.repositories.module_repository import ModuleRepository


class CatalogService:
    def __init__(self, modules: ModuleRepository, cache: Optional[CatalogCacheRepository] = None):
        self.modules = modules
        self.cache = cache

    def seed(self) -> int:
        inserted = self.modules.seed(seed_modules())
        logging.info(f"[catalog] Módulos sembrados: {inserted}")
        return inserted

    def snapshot(self) -> List[Module]:
        return self.modules.list()

    def list_catalog(self) -> Dict[str, Any]:
        """Catálogo agrupado por categoría (Design, Filmmaking, Music)."""
        if self.cache:
            cached = self.cache.get_catalog()
            if cached:
                return cached

        modules = self.snapshot()
        grouped = {
            category.value: [m.to_public() for m in modules if m.category == category.value]
            for category in CATEGORY_ORDER
        }
        catalog = {"data": grouped, "totalModules": len(modules)}

        if self.cache:
            self.cache.set_catalog(catalog)
        return catalog

    def get_module(self, module_id: Any) -> Module:
        try:
            module_id = int(module_id)
        except (TypeError, ValueError):
            raise NotFoundError("Module not found")
        if abs(module_id) > MAX_MODULE_ID:
            raise NotFoundError("Module not found")

        module = self.modules.get(module_id)
        if module is None:
            raise NotFoundError("Module not found")
        return module

    def invalidate(self):
        if self.cache:
            self.cache.invalidate_catalog()
