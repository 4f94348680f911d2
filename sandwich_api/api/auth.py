"""
Authentication API router
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sandwich_api.api.deps import get_auth_service
from sandwich_api.models.user import EmailExists, LoginRequest, LoginResponse, RegisterRequest
from sandwich_api.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register")
async def register_user(
    user_data: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Any:
    """Register a new user"""
    if user_data.email is None or user_data.password is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email and password required"
        )
    auth.register(user_data.email, user_data.password)
    return {"success": True}


@router.get("/exists", response_model=EmailExists)
async def email_exists(
    email: Optional[str] = None,
    auth: AuthService = Depends(get_auth_service),
) -> Any:
    if email is None or not email.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email required"
        )
    return {"exists": auth.email_exists(email)}


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Any:
    """Login and return a bearer token, or an MFA challenge token"""
    if credentials.email is None or credentials.password is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email and password required"
        )
    result = auth.authenticate(credentials.email, credentials.password)
    if result.requires_mfa:
        return LoginResponse(requires_mfa=True, mfa_token=result.mfa_token)
    return LoginResponse(token=result.token)
