from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# -------------------- payloads --------------------

class SignupIn(BaseModel):
    # todo opcional: los faltantes se reportan como ValidationError del servicio
    name: Optional[str] = None
    email: Optional[str] = None
    # el servicio decide qué cuenta como edad válida ("15" sí, true no)
    age: Optional[Any] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ModuleActionIn(BaseModel):
    moduleId: Optional[Any] = None


# -------------------- registro --------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    id: int
    name: str
    email: str
    age: int
    password_hash: str
    enrolled_module_ids: List[int] = Field(default_factory=list)
    completed_module_ids: List[int] = Field(default_factory=list)
    progress: Dict[int, int] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    version: int = 1

    def is_enrolled(self, module_id: int) -> bool:
        return module_id in self.enrolled_module_ids

    def is_completed(self, module_id: int) -> bool:
        return module_id in self.completed_module_ids

    def to_public(self) -> Dict[str, Any]:
        """Datos seguros para devolver al cliente (nunca el hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "enrolledModules": list(self.enrolled_module_ids),
        }

    # Mongo guarda los campos con los nombres históricos de la colección users
    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "password": self.password_hash,
            "enrolledModules": list(self.enrolled_module_ids),
            "completedModules": list(self.completed_module_ids),
            "moduleProgress": {str(k): v for k, v in self.progress.items()},
            "createdAt": self.created_at,
            "version": self.version,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=doc["_id"],
            name=doc["name"],
            email=doc["email"],
            age=doc["age"],
            password_hash=doc["password"],
            enrolled_module_ids=doc.get("enrolledModules") or [],
            completed_module_ids=doc.get("completedModules") or [],
            progress={int(k): int(v) for k, v in (doc.get("moduleProgress") or {}).items()},
            created_at=doc.get("createdAt") or _utcnow(),
            version=doc.get("version", 1),
        )
