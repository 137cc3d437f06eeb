"""Authentication router: password and federated sign-in."""

from fastapi import APIRouter, Depends, Header
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Optional

from fittrack.database import get_db
from fittrack.models import User
from fittrack.schemas import (
    FederatedSigninRequest,
    SigninRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from fittrack.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)


# ============== Dependencies ==============

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    x_auth_token: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token (or legacy x-auth-token header) to a user."""
    return AuthService(db).resolve_token(token or x_auth_token)


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=AuthService.create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


# ============== Auth Endpoints ==============

@router.post("/signup", response_model=TokenResponse, status_code=201)
def signup(
    user_data: SignupRequest,
    db: Session = Depends(get_db),
):
    """Register a new user."""
    user = AuthService(db).signup(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return _token_response(user)


@router.post("/signin", response_model=TokenResponse)
def signin(
    credentials: SigninRequest,
    db: Session = Depends(get_db),
):
    """Login with email and password."""
    user = AuthService(db).signin(credentials.email, credentials.password)
    return _token_response(user)


@router.post("/google", response_model=TokenResponse)
def google_signin(
    payload: FederatedSigninRequest,
    db: Session = Depends(get_db),
):
    """Find or create the account for a Google sign-in."""
    user = AuthService(db).federated_signin(
        email=payload.email,
        name=payload.name,
        external_auth_id=payload.id_token,
    )
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: User = Depends(get_current_user),
):
    """Get current authenticated user info."""
    return current_user
