"""Registration, login and current-identity endpoints."""

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from resource_hub.database.mongo import get_db
from resource_hub.dtos import ApiResponse, AuthData, LoginRequest, RegisterRequest, UserData
from resource_hub.entities.user import User
from resource_hub.middleware.auth import get_current_user
from resource_hub.services.auth_service import AuthService, to_user_response

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(payload: RegisterRequest, db: Database = Depends(get_db)):
    """Create a learner account and return it with a token."""
    service = AuthService(db)
    data = service.register(payload.name, payload.email, payload.password)
    return ApiResponse[AuthData](message="User registered successfully", data=data)


@router.post("/login", response_model=ApiResponse[AuthData], response_model_exclude_none=True)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    service = AuthService(db)
    data = service.login(payload.email, payload.password)
    return ApiResponse[AuthData](message="Login successful", data=data)


@router.get("/me", response_model=ApiResponse[UserData], response_model_exclude_none=True)
def me(user: User = Depends(get_current_user)):
    """Current identity, including bookmark ids."""
    return ApiResponse[UserData](data=UserData(user=to_user_response(user)))
