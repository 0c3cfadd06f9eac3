"""Auth service: inscription et connexion.

Les échecs métier (conflit, identifiants invalides) sont renvoyés comme
``None``; seules les erreurs inattendues remontent en exception.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskapi.core.config import JwtSettings
from taskapi.core.security import create_access_token
from taskapi.models.user import User
from taskapi.repositories.user_repository import UserRepository
from taskapi.schemas.user import RegisterRequest, LoginRequest, AuthResponse

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "User"


def build_auth_response(user: User, jwt_settings: JwtSettings) -> AuthResponse:
    token, expires_at = create_access_token(user, jwt_settings)
    return AuthResponse(
        user_id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        token=token,
        expires_at=expires_at,
    )


def register(db: Session, data: RegisterRequest, jwt_settings: JwtSettings) -> Optional[AuthResponse]:
    users = UserRepository(db)

    if users.username_exists(data.username):
        logger.warning(f"Registration failed: username {data.username} already exists")
        return None

    if users.email_exists(data.email):
        logger.warning(f"Registration failed: email {data.email} already exists")
        return None

    user = User(
        username=data.username,
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        role=DEFAULT_ROLE,
        is_active=True,
        created_at=datetime.utcnow(),
    )
    user.set_password(data.password)
    try:
        users.add(user)
    except IntegrityError:
        # inscription concurrente avec le même username/email
        db.rollback()
        logger.warning(f"Registration failed: unique constraint hit for {data.username}")
        return None

    logger.info(f"User {user.username} registered successfully")
    return build_auth_response(user, jwt_settings)


def login(db: Session, credentials: LoginRequest, jwt_settings: JwtSettings) -> Optional[AuthResponse]:
    user = UserRepository(db).get_by_username_or_email(credentials.username_or_email)

    if not user:
        logger.warning(f"Login failed: user {credentials.username_or_email} not found")
        return None

    if not user.is_active:
        logger.warning(f"Login failed: user {user.username} account is inactive")
        return None

    # bcrypt.checkpw, jamais de comparaison de chaînes
    if not user.verify_password(credentials.password):
        logger.warning(f"Login failed: invalid password for user {user.username}")
        return None

    logger.info(f"User {user.username} logged in successfully")
    return build_auth_response(user, jwt_settings)
