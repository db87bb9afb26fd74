from fastapi import Request

from entropy.errors import AuthError
from entropy.services.auth_service import AuthService
from entropy.services.catalog_service import CatalogService
from entropy.services.enrollment_service import EnrollmentService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_enrollment_service(request: Request) -> EnrollmentService:
    return request.app.state.enrollment_service


def current_user_id(request: Request) -> int:
    # lo completa session_middleware
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise AuthError("Access token required")
    return user_id
