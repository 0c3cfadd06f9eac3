import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple
from jose import JWTError, jwt
from taskapi.core.config import JwtSettings

logger = logging.getLogger(__name__)


def create_access_token(user, jwt_settings: JwtSettings, now: Optional[datetime] = None) -> Tuple[str, datetime]:
    """Crée un token JWT signé pour l'utilisateur.

    Retourne le token et sa date d'expiration absolue (UTC), qui est aussi
    renvoyée au client pour affichage.
    """
    issued_at = now or datetime.utcnow()
    expires_at = issued_at + timedelta(minutes=jwt_settings.expiration_minutes)

    payload = {
        "sub": str(user.id),
        "unique_name": user.username,
        "email": user.email,
        "role": user.role,
        "iss": jwt_settings.issuer,
        "aud": jwt_settings.audience,
        "iat": issued_at,
        "exp": expires_at,
    }
    # claims optionnels
    if user.first_name:
        payload["given_name"] = user.first_name
    if user.last_name:
        payload["family_name"] = user.last_name

    token = jwt.encode(payload, jwt_settings.secret_key, algorithm=jwt_settings.algorithm)
    return token, expires_at


def decode_token(token: str, jwt_settings: JwtSettings) -> Optional[dict]:
    """Vérifie signature, issuer, audience et expiration (sans tolérance d'horloge)"""
    try:
        return jwt.decode(
            token,
            jwt_settings.secret_key,
            algorithms=[jwt_settings.algorithm],
            audience=jwt_settings.audience,
            issuer=jwt_settings.issuer,
            options={
                "require_exp": True,
                "require_iss": True,
                "require_aud": True,
                "require_sub": True,
                "leeway": 0,
            },
        )
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None


def validate_token(token: str, jwt_settings: JwtSettings) -> bool:
    return decode_token(token, jwt_settings) is not None


def extract_user_id(token: str) -> Optional[int]:
    # lecture du sub sans vérification, à n'utiliser qu'après validate_token()
    try:
        claims = jwt.get_unverified_claims(token)
        return int(claims["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        return None
