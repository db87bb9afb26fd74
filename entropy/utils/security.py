from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from entropy.config.settings import settings

# Usamos pbkdf2_sha256 para evitar dependencias binarias (bcrypt) en la imagen.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # hash corrupto o vacío: se trata como contraseña incorrecta
        return False


def create_access_token(user_id: int, secret: str = None, ttl: timedelta = None,
                        now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    ttl = ttl or timedelta(days=settings.token_ttl_days)
    claims = {
        "userId": user_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + ttl).timestamp()),
    }
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, secret: str = None) -> dict:
    """Valida firma y expiración. Lanza JWTError (o ExpiredSignatureError) si no sirve."""
    # sin exp el token no vencería nunca: se exige
    return jwt.decode(
        token,
        secret or settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require_exp": True, "require_iat": True},
    )


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
