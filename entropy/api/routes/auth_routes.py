from fastapi import APIRouter, Depends

from entropy.api.dependencies import get_auth_service
from entropy.models.user_model import LoginIn, SignupIn
from entropy.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])


@router.post("/signup", status_code=201)
def signup(payload: SignupIn, svc: AuthService = Depends(get_auth_service)):
    user, token = svc.register(payload.name, payload.email, payload.age, payload.password)
    return {
        "success": True,
        "message": "User created successfully",
        "data": user.to_public(),
        "token": token,
    }


@router.post("/login")
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    """Login con { "email": "..", "password": ".." }. Devuelve un token Bearer válido 7 días."""
    user, token = svc.authenticate(payload.email, payload.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": user.to_public(),
        "token": token,
    }
