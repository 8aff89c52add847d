from fastapi import APIRouter
from starlette import status
from db.connection import db_dependency
from db.VerifyToken import user_dependency
from schemas.auth.schemas import CreateUserRequest, LoginUser, AuthResponse
from schemas.auth.returnLoginSchema import ProfileResponse
from services import user_service

# Import from divided files
from Endpoints.Auth.normal_login import login_for_access_token
from Endpoints.Auth.normal_register import register_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    summary="User registration",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        status.HTTP_409_CONFLICT: {"description": "Username or email already exists"},
        status.HTTP_400_BAD_REQUEST: {"description": "Validation failed"},
    }
)
def register_user_route(db: db_dependency, create_user_request: CreateUserRequest):
    return register_user(db, create_user_request)


@router.post(
    "/login",
    summary="User login",
    description="Authenticate user with username (or email) and password",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={
        status.HTTP_200_OK: {"description": "Successfully authenticated"},
        status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials"},
        status.HTTP_403_FORBIDDEN: {"description": "Account inactive"},
    }
)
def login_route(form_data: LoginUser, db: db_dependency):
    """
    Authenticate user and return a bearer token.

    Returns:
        Dictionary containing:
        - token: JWT to send as `Authorization: Bearer <token>`
        - user: basic account information
    """
    return login_for_access_token(form_data, db)


@router.get("/profile", response_model=ProfileResponse)
def get_profile(db: db_dependency, current_user: user_dependency):
    return {"user": user_service.get_own_profile(db, current_user)}
