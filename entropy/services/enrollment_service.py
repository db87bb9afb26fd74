# entropy/services/enrollment_service.py
from typing import Any, Dict, List, Optional
import logging

from entropy.errors import ConflictError, NotFoundError, PreconditionError, ValidationError
from entropy.models.module_model import MAX_MODULE_ID, Module
from entropy.models.user_model import User
from entropy.repositories.module_repository import ModuleRepository
from entropy.repositories.user_repository import UserRepository
from entropy.services.catalog_service import CatalogService

MAX_RECOMMENDATIONS = 3


def parse_module_id(raw: Any) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Module ID is required")

    value = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            value = None

    if value is None or abs(value) > MAX_MODULE_ID:
        raise ValidationError("Module ID must be a number")
    return value


def recommend_modules(user: User, catalog: List[Module], limit: int = MAX_RECOMMENDATIONS) -> List[Module]:
    """
    Sugerencias: módulos de las mismas categorías en las que el usuario ya está
    inscripto, sin repetir inscriptos ni completados. Orden del catálogo (id asc).
    """
    by_id = {m.id: m for m in catalog}
    categories = {by_id[mid].category for mid in user.enrolled_module_ids if mid in by_id}
    taken = set(user.enrolled_module_ids) | set(user.completed_module_ids)

    out = []
    for module in sorted(catalog, key=lambda m: m.id):
        if module.category in categories and module.id not in taken:
            out.append(module)
            if len(out) == limit:
                break
    return out


class EnrollmentService:
    """
    Ciclo de vida por (usuario, módulo): NotEnrolled -> Enrolled -> Completed.
    Cada transición es una sola unidad read-check-write sobre el usuario.
    """

    def __init__(self, users: UserRepository, modules: ModuleRepository,
                 catalog: Optional[CatalogService] = None):
        self.users = users
        self.modules = modules
        self.catalog = catalog or CatalogService(modules)

    def _require_module(self, module_id: Any) -> Module:
        module_id = parse_module_id(module_id)
        module = self.modules.get(module_id)
        if module is None:
            raise NotFoundError("Module not found")
        return module

    # -------------------- API --------------------

    def enroll(self, user_id: int, module_id: Any) -> Dict[str, Any]:
        module = self._require_module(module_id)
        mid = module.id

        def _enroll(user: User):
            if user.is_completed(mid):
                raise ConflictError("Module already completed")
            if user.is_enrolled(mid):
                raise ConflictError("Already enrolled in this module")
            user.enrolled_module_ids.append(mid)
            user.progress[mid] = 0

        try:
            user = self.users.update(user_id, _enroll)
        except ConflictError as e:
            logging.warning(f"[enroll] user={user_id} module={mid}: {e.message}")
            raise

        # solo después de que la inscripción quedó escrita
        module = self.modules.increment_enrolled(mid)
        self.catalog.invalidate()
        logging.info(f"[enroll] user={user_id} module={mid} enrolled={module.enrolled}")

        return {
            "module": module.to_public(),
            "enrolledModules": list(user.enrolled_module_ids),
        }

    def complete(self, user_id: int, module_id: Any) -> Dict[str, Any]:
        module = self._require_module(module_id)
        mid = module.id

        def _complete(user: User):
            if not user.is_enrolled(mid):
                raise PreconditionError("You must be enrolled in this module to complete it")
            if user.is_completed(mid):
                raise ConflictError("Module already completed")
            user.completed_module_ids.append(mid)
            user.progress[mid] = 100

        try:
            user = self.users.update(user_id, _complete)
        except (ConflictError, PreconditionError) as e:
            logging.warning(f"[complete] user={user_id} module={mid}: {e.message}")
            raise

        logging.info(f"[complete] user={user_id} module={mid}")
        return {
            "module": module.to_public(),
            "completedModules": list(user.completed_module_ids),
            "progress": dict(user.progress),
        }

    def get_learning_state(self, user_id: int) -> Dict[str, Any]:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        catalog = self.catalog.snapshot()
        enrolled = set(user.enrolled_module_ids)
        completed = set(user.completed_module_ids)
        progress = {mid: user.progress.get(mid, 0) for mid in user.enrolled_module_ids}

        public_user = user.to_public()
        public_user.pop("enrolledModules")
        return {
            "user": public_user,
            "enrolledModules": list(user.enrolled_module_ids),
            "completedModules": list(user.completed_module_ids),
            "progress": progress,
            "enrolledModulesData": [m.to_public() for m in catalog if m.id in enrolled],
            "completedModulesData": [m.to_public() for m in catalog if m.id in completed],
            "allModules": [m.to_public() for m in catalog],
            "recommendedModules": [m.to_public() for m in recommend_modules(user, catalog)],
        }
