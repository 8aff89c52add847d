from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Annotated, Optional
from sqlalchemy import or_, func
from db.connection import db_dependency
from models.userModels import Users
from schemas.auth.schemas import LoginUser, SessionUser
from schemas.auth.returnLoginSchema import ReturnUser
from functions.generateToken import create_access_token, decode_access_token
from functions.errors import Unauthenticated, Forbidden
from .normal_register import bcrypt_context
import logging

logger = logging.getLogger(__name__)

# auto_error is off so a missing header maps to our own 401 (or to anonymous)
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate_user(username_or_email: str, password: str, db: db_dependency) -> Optional[Users]:
    """
    Authenticate a user by username or email.
    Unknown users still pay for one hash verification so response time does
    not reveal whether the account exists.
    """
    # usernames and emails are matched case-insensitively
    identifier = username_or_email.lower()
    user = db.query(Users).filter(
        or_(func.lower(Users.username) == identifier, func.lower(Users.email) == identifier)
    ).first()

    if not user:
        bcrypt_context.dummy_verify()
        return None

    if not bcrypt_context.verify(password, user.password_hash):
        return None

    return user


def login_for_access_token(form_data: LoginUser, db: db_dependency):
    """
    Handle user login and return a bearer token.
    """
    user = authenticate_user(form_data.username, form_data.password, db)
    if not user:
        logger.info("Failed login attempt")
        raise Unauthenticated("Invalid credentials")

    if not user.is_active:
        raise Forbidden("Account is inactive. Please contact support.")

    logger.info("User id=%s logged in", user.id)

    return {
        "message": "Login successful",
        "token": create_access_token(user.id),
        "user": ReturnUser.model_validate(user)
    }


def _load_session_user(db, token: str) -> SessionUser:
    user_id = decode_access_token(token)
    # Get fresh user data from database
    user = db.query(Users).filter(Users.id == user_id).first()
    if not user:
        raise Unauthenticated("Invalid token - user not found")
    if not user.is_active:
        raise Unauthenticated("Account is inactive")
    return SessionUser.model_validate(user)


def get_current_user(
    db: db_dependency,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> SessionUser:
    """
    Get current authenticated user from the bearer token.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")
    return _load_session_user(db, credentials.credentials)


def get_optional_user(
    db: db_dependency,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Optional[SessionUser]:
    """
    Same as get_current_user, but a missing or unusable token means anonymous.
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _load_session_user(db, credentials.credentials)
    except Unauthenticated:
        return None


def get_current_creator(user: Annotated[SessionUser, Depends(get_current_user)]) -> SessionUser:
    if not user.is_creator:
        raise Forbidden("Creator access required")
    return user
