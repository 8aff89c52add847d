from sqlalchemy import or_, func
from sqlalchemy.exc import IntegrityError
from passlib.context import CryptContext
from db.connection import db_dependency
from models.userModels import Users
from schemas.auth.schemas import CreateUserRequest
from schemas.auth.returnLoginSchema import ReturnUser
from functions.generateToken import create_access_token
from functions.errors import Conflict
import logging
import os

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

bcrypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def register_user(db: db_dependency, create_user_request: CreateUserRequest):
    # Check if username or email already exists
    existing_user = db.query(Users.id).filter(
        or_(func.lower(Users.username) == create_user_request.username.lower(),
            func.lower(Users.email) == create_user_request.email)
    ).first()

    if existing_user:
        raise Conflict("Username or email already exists")

    create_user_model = Users(
        username=create_user_request.username,
        email=create_user_request.email,
        password_hash=bcrypt_context.hash(create_user_request.password),
        role=create_user_request.role,
        display_name=create_user_request.username,
        is_active=True
    )

    db.add(create_user_model)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration of the same name/email
        db.rollback()
        raise Conflict("Username or email already exists")
    db.refresh(create_user_model)

    logger.info("Registered user id=%s role=%s", create_user_model.id, create_user_model.role.value)

    return {
        "message": "User registered successfully",
        "token": create_access_token(create_user_model.id),
        "user": ReturnUser.model_validate(create_user_model)
    }
