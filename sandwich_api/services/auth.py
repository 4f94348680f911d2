"""
Account registration and login
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sandwich_api.core.exceptions import AuthenticationError, ConflictError, StoreUnavailableError, ValidationError
from sandwich_api.core.security import create_access_token, create_mfa_token, get_password_hash, verify_password
from sandwich_api.models.user import User
from sandwich_api.services.notifications import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: Optional[str] = None
    requires_mfa: bool = False
    mfa_token: Optional[str] = None


class AuthService:
    def __init__(self, db: Session, notifications: NotificationService):
        self.db = db
        self.notifications = notifications

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def register(self, email: Optional[str], password: Optional[str]) -> User:
        email = (email or "").strip()
        if not email:
            raise ValidationError.single("email", "email required")
        if not password:
            raise ValidationError.single("password", "password required")

        try:
            if self._find_by_email(email) is not None:
                logger.info(f"Registration attempt for existing email: {email}")
                raise ConflictError("email already registered")

            user = User(email=email, password_hash=get_password_hash(password), is_admin=False)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            # lost a race with a concurrent registration for the same email
            self.db.rollback()
            logger.info(f"Registration for {email} hit the unique email constraint")
            raise ConflictError("email already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Register failed: {e}")
            raise StoreUnavailableError("server error") from e

        # a failed welcome email must not fail the registration
        try:
            self.notifications.send_welcome(email)
        except Exception as e:
            logger.warning(f"Failed to send welcome email to {email}: {e}")

        return user

    def email_exists(self, email: Optional[str]) -> bool:
        email = (email or "").strip()
        if not email:
            return False
        try:
            return self._find_by_email(email) is not None
        except SQLAlchemyError as e:
            logger.error(f"Email lookup failed: {e}")
            return False

    def authenticate(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        email = (email or "").strip()
        logger.info(f"Login attempt received for email: {email}")
        if not email or not password:
            raise AuthenticationError("Invalid credentials")

        try:
            user = self._find_by_email(email)
        except SQLAlchemyError as e:
            logger.error(f"Authenticate failed: {e}")
            raise StoreUnavailableError("server error") from e

        # same answer whether or not the user exists
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Login failed for email: {email}")
            raise AuthenticationError("Invalid credentials")

        if user.mfa_secret:
            return LoginResult(requires_mfa=True, mfa_token=create_mfa_token(user.id))

        return LoginResult(token=create_access_token(user.id, user.email))
