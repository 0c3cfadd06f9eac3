import logging
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskapi.core.config import JwtSettings, get_jwt_settings
from taskapi.core.database import get_db
from taskapi.core.security import validate_token
from taskapi.schemas.common import ApiResponse, success_response
from taskapi.schemas.user import RegisterRequest, LoginRequest, AuthResponse
from taskapi.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
    jwt_settings: JwtSettings = Depends(get_jwt_settings),
):
    """Créer un nouvel utilisateur et renvoyer son token"""
    result = auth_service.register(db, user_data, jwt_settings)
    if result is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username or email already exists")

    return success_response(result, "User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    jwt_settings: JwtSettings = Depends(get_jwt_settings),
):
    """Se connecter avec username ou email"""
    result = auth_service.login(db, credentials, jwt_settings)
    if result is None:
        logger.warning(f"Failed login attempt for {credentials.username_or_email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username/email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return success_response(result, "Login successful")


@router.post("/validate", response_model=ApiResponse)
def validate(token: str = Body(...), jwt_settings: JwtSettings = Depends(get_jwt_settings)):
    # le body est une simple chaîne JSON: "eyJ..."
    if not validate_token(token, jwt_settings):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    return success_response(None, "Token is valid")
