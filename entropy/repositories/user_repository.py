import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from entropy.errors import ConflictError, NotFoundError
from entropy.models.user_model import User
from entropy.utils.locks import KeyedLock

UserMutation = Callable[[User], None]


class UserRepository(ABC):
    """Contrato de persistencia de usuarios que usan los servicios."""

    @abstractmethod
    def create(self, name: str, email: str, age: int, password_hash: str) -> User:
        """Crea el usuario con un id nuevo. ConflictError si el email ya existe."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def update(self, user_id: int, mutate: UserMutation) -> User:
        """
        Lee, aplica `mutate` sobre una copia y escribe, todo como una unidad.
        Si `mutate` lanza, no se escribe nada. NotFoundError si el usuario no existe.
        """


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: Dict[int, User] = {}
        self._by_email: Dict[str, int] = {}
        self._user_locks = KeyedLock()
        self._email_locks = KeyedLock()
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

    def _next_id(self) -> int:
        with self._ids_lock:
            return next(self._ids)

    def create(self, name: str, email: str, age: int, password_hash: str) -> User:
        with self._email_locks.hold(email):
            if email in self._by_email:
                raise ConflictError("User already exists with this email")
            user = User(id=self._next_id(), name=name, email=email, age=age, password_hash=password_hash)
            self._users[user.id] = user
            self._by_email[email] = user.id
        return user.model_copy(deep=True)

    def find_by_id(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        user_id = self._by_email.get(email)
        return self.find_by_id(user_id) if user_id is not None else None

    def update(self, user_id: int, mutate: UserMutation) -> User:
        with self._user_locks.hold(user_id):
            current = self._users.get(user_id)
            if current is None:
                raise NotFoundError("User not found")
            draft = current.model_copy(deep=True)
            mutate(draft)
            draft.version = current.version + 1
            self._users[user_id] = draft
        return draft.model_copy(deep=True)

    def __len__(self):
        return len(self._users)
