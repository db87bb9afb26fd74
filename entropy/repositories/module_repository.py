from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from entropy.errors import NotFoundError
from entropy.models.module_model import Module
from entropy.utils.locks import KeyedLock


class ModuleRepository(ABC):
    @abstractmethod
    def seed(self, modules: Iterable[Module]) -> int:
        """Inserta los módulos que todavía no existen. Devuelve cuántos insertó."""

    @abstractmethod
    def list(self) -> List[Module]:
        """Todos los módulos ordenados por id."""

    @abstractmethod
    def get(self, module_id: int) -> Optional[Module]:
        ...

    @abstractmethod
    def increment_enrolled(self, module_id: int) -> Module:
        """Suma 1 al contador de inscriptos de forma atómica y devuelve el módulo."""


class InMemoryModuleRepository(ModuleRepository):
    def __init__(self, modules: Iterable[Module] = ()):
        self._modules: Dict[int, Module] = {}
        self._locks = KeyedLock()
        self.seed(modules)

    def seed(self, modules: Iterable[Module]) -> int:
        inserted = 0
        for module in modules:
            with self._locks.hold(module.id):
                if module.id not in self._modules:
                    self._modules[module.id] = module.model_copy()
                    inserted += 1
        return inserted

    def list(self) -> List[Module]:
        return [self._modules[k].model_copy() for k in sorted(self._modules)]

    def get(self, module_id: int) -> Optional[Module]:
        module = self._modules.get(module_id)
        return module.model_copy() if module else None

    def increment_enrolled(self, module_id: int) -> Module:
        with self._locks.hold(module_id):
            module = self._modules.get(module_id)
            if module is None:
                raise NotFoundError("Module not found")
            updated = module.model_copy(update={"enrolled": module.enrolled + 1})
            self._modules[module_id] = updated
        return updated.model_copy()
