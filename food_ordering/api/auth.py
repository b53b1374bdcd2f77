"""Login endpoints.

There is no credential store: any non-blank email and password are
accepted. Logging in starts an order session, logging out ends it.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from food_ordering.core.dependencies import get_session_manager
from food_ordering.services.order_session.manager import OrderSessionManager

router = APIRouter()
logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    """Login request model."""
    email: str
    password: str


class LogoutRequest(BaseModel):
    """Logout request model."""
    session_id: str


class LoginResponse(BaseModel):
    """Login response model."""
    success: bool
    message: str
    session_id: str


@router.post("/api/auth/login", response_model=LoginResponse)
async def login(
    login_req: LoginRequest,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Login endpoint."""
    if not login_req.email.strip() or not login_req.password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required")

    session = manager.create_session()
    logger.info(f"[AUTH] Login accepted - session: {session.session_id}")

    return LoginResponse(
        success=True,
        message="Login successful",
        session_id=session.session_id,
    )


@router.post("/api/auth/logout")
async def logout(
    logout_req: LogoutRequest,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Logout endpoint. Resets the session's cart."""
    manager.end_session(logout_req.session_id)
    logger.info(f"[AUTH] Logged out - session: {logout_req.session_id}")
    return {"success": True, "message": "Logged out"}
