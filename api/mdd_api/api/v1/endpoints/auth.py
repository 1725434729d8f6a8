import hmac
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from mdd_api.core.database import get_session
from mdd_api.core.exceptions import AuthenticationError, ErrorKind
from mdd_api.models.user import User
from mdd_api.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, AuthResponse, UserResponse
from mdd_api.services import user_service
from mdd_api.services.identity_service import load_principal

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid username/email or password"


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login with the configured identifier (email or username) and password."""
    result = load_principal(session, login_data.identifier)
    if result.kind is ErrorKind.LOOKUP_FAILURE:
        result.unwrap()

    # Unknown identifier and wrong password answer the same way
    principal = result.value
    if principal is None or not hmac.compare_digest(
        principal.password_hash, User.hash_password(login_data.password)
    ):
        raise AuthenticationError(INVALID_CREDENTIALS)

    return LoginResponse(identifier=principal.identifier, message="Login successful")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new user."""
    new_user = User(
        username=register_data.username,
        email=register_data.email,
        password=User.hash_password(register_data.password),
    )
    user = user_service.create_user(session, new_user).unwrap()

    return AuthResponse(
        user=UserResponse.model_validate(user),
        message="Registration successful"
    )
