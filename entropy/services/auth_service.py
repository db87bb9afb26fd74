# entropy/services/auth_service.py
import logging
from datetime import timedelta
from typing import Any, Optional, Tuple

from entropy.config.settings import settings
from entropy.errors import AuthError, ValidationError
from entropy.models.user_model import User
from entropy.repositories.user_repository import UserRepository
from entropy.utils.security import (
    JWTError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

MIN_AGE = 13
MAX_AGE = 19
MIN_PASSWORD_LENGTH = 6

INVALID_CREDENTIALS = "Invalid email or password"


def _blank(value: Optional[str]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_age(age: Any) -> int:
    if isinstance(age, bool):
        raise ValidationError("Age must be a whole number")
    if isinstance(age, int):
        return age
    if isinstance(age, float) and age.is_integer():
        return int(age)
    if isinstance(age, str):
        try:
            return int(age.strip())
        except ValueError:
            pass
    raise ValidationError("Age must be a whole number")


class AuthService:
    """Alta de cuentas, login y verificación de tokens (JWT firmados, sin estado)."""

    def __init__(self, users: UserRepository, secret: str = None, token_ttl: timedelta = None):
        self.users = users
        self.secret = secret or settings.jwt_secret
        self.token_ttl = token_ttl or timedelta(days=settings.token_ttl_days)

    # -------------------- helpers internos --------------------
    def issue_token(self, user_id: int) -> str:
        return create_access_token(user_id, secret=self.secret, ttl=self.token_ttl)

    @staticmethod
    def _validate_signup(name, email, age: Any, password) -> int:
        """Valida el alta y devuelve la edad ya normalizada a int."""
        if _blank(name) or _blank(email) or _blank(age) or _blank(password):
            raise ValidationError("All fields are required")
        age = _parse_age(age)
        if age < MIN_AGE or age > MAX_AGE:
            raise ValidationError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return age

    # -------------------- API --------------------
    def register(self, name: str, email: str, age: Any, password: str) -> Tuple[User, str]:
        age = self._validate_signup(name, email, age, password)

        # el repo garantiza la unicidad del email (ConflictError)
        user = self.users.create(
            name=name.strip(),
            email=email,
            age=age,
            password_hash=hash_password(password),
        )
        logging.info(f"[signup] Usuario creado id={user.id}")
        return user, self.issue_token(user.id)

    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        if _blank(email) or _blank(password):
            raise ValidationError("Email and password are required")

        user = self.users.find_by_email(email)
        # mismo error para email inexistente y contraseña incorrecta
        if user is None or not verify_password(password, user.password_hash):
            logging.warning("[login] Credenciales inválidas")
            raise AuthError(INVALID_CREDENTIALS)

        logging.info(f"[login] Login ok id={user.id}")
        return user, self.issue_token(user.id)

    def verify_credential(self, token: Optional[str]) -> int:
        """Devuelve el userId del token. No toca el store."""
        if _blank(token):
            raise AuthError("Access token required")
        try:
            claims = decode_access_token(token, secret=self.secret)
        except JWTError:
            raise AuthError("Invalid or expired token")

        user_id = claims.get("userId")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise AuthError("Invalid or expired token")
        return user_id
