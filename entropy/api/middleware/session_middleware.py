from fastapi import Request
from fastapi.responses import JSONResponse

from entropy.errors import AuthError, error_body

PROTECTED_PREFIX = "/modules"


def _bearer_token(request: Request):
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


async def session_middleware(request: Request, call_next):
    """
    Middleware HTTP que valida el token antes de las rutas /modules.
    - Sin token -> 401
    - Token inválido, mal firmado o vencido -> 403
    - Token válido -> request.state.user_id
    """
    request.state.user_id = None

    path = request.url.path
    protected = path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")
    if not protected or request.method == "OPTIONS":
        return await call_next(request)

    token = _bearer_token(request)
    if not token:
        return JSONResponse(status_code=401, content=error_body("Access token required"))

    try:
        request.state.user_id = request.app.state.auth_service.verify_credential(token)
    except AuthError:
        return JSONResponse(status_code=403, content=error_body("Invalid or expired token"))

    return await call_next(request)
