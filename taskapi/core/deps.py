from fastapi import Depends, Header, HTTPException, status
from typing import Optional

from taskapi.core.config import JwtSettings, get_jwt_settings
from taskapi.core.security import validate_token, extract_user_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    jwt_settings: JwtSettings = Depends(get_jwt_settings),
) -> int:
    """Résout l'identité de l'appelant depuis le header Authorization.

    Ne touche pas à la base: le token signé suffit. Les endpoints reçoivent
    l'id et le transmettent explicitement aux services.
    """
    # Check header "Bearer <token>"
    if not authorization:
        raise _unauthorized("Missing or malformed authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Missing or malformed authorization header")

    if not validate_token(token, jwt_settings):
        raise _unauthorized("Invalid or expired token")

    user_id = extract_user_id(token)
    if user_id is None:
        raise _unauthorized("Invalid or expired token")

    return user_id
