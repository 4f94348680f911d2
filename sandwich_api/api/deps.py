"""
Dependency wiring for the routers

The catalog backend is chosen here from settings; services only ever see a
CatalogStore.
"""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sandwich_api.core.config import settings
from sandwich_api.core.database import get_db
from sandwich_api.core.security import user_id_from_token
from sandwich_api.services.auth import AuthService
from sandwich_api.services.catalog import CatalogStore, catalog_store_for
from sandwich_api.services.notifications import NotificationService
from sandwich_api.services.sandwiches import SandwichService, SqlAlchemyOrderStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_catalog_store(db: Session = Depends(get_db)) -> CatalogStore:
    return catalog_store_for(settings.catalog_backend, db)


def get_sandwich_service(
    db: Session = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> SandwichService:
    return SandwichService(SqlAlchemyOrderStore(db), catalog)


def get_notification_service() -> NotificationService:
    return NotificationService(settings)


def get_auth_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> AuthService:
    return AuthService(db, notifications)


async def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[int]:
    """User id from the bearer token; None for anonymous or unusable tokens"""
    if credentials is None:
        return None
    return user_id_from_token(credentials.credentials)


async def get_current_user_id(
    user_id: Optional[int] = Depends(get_optional_user_id),
) -> int:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
