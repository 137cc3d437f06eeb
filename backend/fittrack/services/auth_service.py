"""Authentication service with JWT and password hashing."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from passlib.context import CryptContext
from jose import jwt, JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.errors import Conflict, Unauthorized, ValidationError
from fittrack.models import User


logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:
    """Identity store: accounts, credentials and bearer tokens."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def normalize_email(email: Optional[str]) -> str:
        return (email or "").strip().lower()

    @staticmethod
    def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token for a user id."""
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        )
        to_encode = {"sub": str(user_id), "exp": expire}
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_token(token: str) -> Optional[dict]:
        """Decode and validate a JWT token."""
        try:
            return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        except JWTError:
            return None

    def resolve_token(self, token: Optional[str]) -> User:
        """Authenticate a bearer token to its user, or raise Unauthorized."""
        if not token:
            raise Unauthorized("No token provided")

        payload = self.decode_token(token)
        if not payload:
            raise Unauthorized("Invalid or expired token")

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise Unauthorized("Invalid or expired token")

        user = self.get_user_by_id(user_id)
        if not user:
            raise Unauthorized("Invalid or expired token")
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == self.normalize_email(email)).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def display_name(self, user_id: int) -> str:
        """Name snapshot for denormalized copies; never refreshed afterwards."""
        user = self.get_user_by_id(user_id)
        return user.display_name if user else "User"

    def _save_new_user(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Email already exists")
        self.db.refresh(user)
        return user

    def signup(self, name: str, email: str, password: str) -> User:
        """Create a password account."""
        name = (name or "").strip()
        email = self.normalize_email(email)
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        if self.get_user_by_email(email):
            raise Conflict("Email already exists")

        user = self._save_new_user(
            User(name=name, email=email, hashed_password=self.get_password_hash(password))
        )
        logger.info("Created user %s", user.id)
        return user

    def signin(self, email: str, password: str) -> User:
        """Authenticate a user by email and password."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.get_user_by_email(email)
        if not user:
            raise Unauthorized("Invalid credentials")
        if not user.hashed_password:
            raise Unauthorized("Please sign in with Google")
        if not self.verify_password(password, user.hashed_password):
            raise Unauthorized("Invalid credentials")
        return user

    def federated_signin(
        self,
        email: str,
        name: Optional[str] = None,
        external_auth_id: Optional[str] = None,
    ) -> User:
        """Find or create the account for a federated identity."""
        email = self.normalize_email(email)
        if not email:
            raise ValidationError("Email is required", field="email")

        user = self.get_user_by_email(email)
        if user:
            # Attach the federated id once; never overwrite an existing one
            if not user.external_auth_id and external_auth_id:
                user.external_auth_id = external_auth_id
                self.db.commit()
                self.db.refresh(user)
            return user

        user = self._save_new_user(
            User(name=(name or "").strip() or "User", email=email, external_auth_id=external_auth_id)
        )
        logger.info("Created federated user %s", user.id)
        return user
