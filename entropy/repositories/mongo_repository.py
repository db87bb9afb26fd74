import logging
from typing import Iterable, List, Optional

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from entropy.config.database import get_mongo_db
from entropy.errors import ConflictError, NotFoundError
from entropy.models.module_model import Module
from entropy.models.user_model import User
from entropy.repositories.module_repository import ModuleRepository
from entropy.repositories.user_repository import UserMutation, UserRepository


def next_sequence(db: Database, name: str) -> int:
    """Contador monotónico atómico en la colección `counters` ($inc + upsert)."""
    doc = db["counters"].find_one_and_update(
        {"_id": name},
        {"$inc": {"seq": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(doc["seq"])


class MongoUserRepository(UserRepository):
    # reintentos del compare-and-swap sobre `version`
    max_cas_attempts = 5

    def __init__(self, db: Database = None):
        # 🔗 Conectarse a Mongo usando la función global de config/database.py
        self.db = db if db is not None else get_mongo_db()
        self.col = self.db["users"]
        try:
            self.col.create_index("email", unique=True)
        except PyMongoError as e:
            logging.warning(f"[users] No se pudo crear el índice único de email: {e}")

    def create(self, name: str, email: str, age: int, password_hash: str) -> User:
        user = User(
            id=next_sequence(self.db, "users"),
            name=name,
            email=email,
            age=age,
            password_hash=password_hash,
        )
        try:
            self.col.insert_one(user.to_document())
        except DuplicateKeyError:
            raise ConflictError("User already exists with this email")
        return user

    def find_by_id(self, user_id: int) -> Optional[User]:
        doc = self.col.find_one({"_id": user_id})
        return User.from_document(doc) if doc else None

    def find_by_email(self, email: str) -> Optional[User]:
        doc = self.col.find_one({"email": email})
        return User.from_document(doc) if doc else None

    def update(self, user_id: int, mutate: UserMutation) -> User:
        for attempt in range(1, self.max_cas_attempts + 1):
            doc = self.col.find_one({"_id": user_id})
            if not doc:
                raise NotFoundError("User not found")

            user = User.from_document(doc)
            expected = doc.get("version")
            mutate(user)
            user.version = (expected or 1) + 1

            # documentos viejos no tienen `version`
            guard = {"_id": user_id, "version": expected if expected is not None else {"$exists": False}}
            res = self.col.replace_one(guard, user.to_document())
            if res.matched_count == 1:
                return user
            logging.warning(f"[users] Escritura concurrente sobre user {user_id}, reintento {attempt}")

        raise ConflictError("Concurrent update on this user, please retry")


class MongoModuleRepository(ModuleRepository):
    def __init__(self, db: Database = None):
        self.db = db if db is not None else get_mongo_db()
        self.col = self.db["modules"]

    def seed(self, modules: Iterable[Module]) -> int:
        inserted = 0
        for module in modules:
            doc = module.to_document()
            _id = doc.pop("_id")
            # $setOnInsert: si ya existe no pisamos el contador de inscriptos
            res = self.col.update_one({"_id": _id}, {"$setOnInsert": doc}, upsert=True)
            if res.upserted_id is not None:
                inserted += 1
        return inserted

    def list(self) -> List[Module]:
        return [Module.from_document(d) for d in self.col.find({}).sort("_id", 1)]

    def get(self, module_id: int) -> Optional[Module]:
        doc = self.col.find_one({"_id": module_id})
        return Module.from_document(doc) if doc else None

    def increment_enrolled(self, module_id: int) -> Module:
        doc = self.col.find_one_and_update(
            {"_id": module_id},
            {"$inc": {"enrolled": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise NotFoundError("Module not found")
        return Module.from_document(doc)
