import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException

from config import Settings, get_settings
from schemas import LoginRequest
from security import TokenPayload, create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/admin/login")
def admin_login(payload: LoginRequest, settings: Settings = Depends(get_settings)):
    """Exchange the configured admin credentials for a bearer token."""
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="Please provide username and password")

    valid_user = hmac.compare_digest(payload.username.encode(), settings.ADMIN_USERNAME.encode())
    valid_password = hmac.compare_digest(payload.password.encode(), settings.ADMIN_PASSWORD.encode())
    if not (valid_user and valid_password):
        logger.warning("Failed admin login for %r", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("Admin %s logged in", payload.username)
    return {
        "success": True,
        "message": "Login successful",
        "token": create_access_token(payload.username, is_admin=True),
        "user": {"username": payload.username, "is_admin": True},
    }


@router.get("/verify")
def verify_token(user: TokenPayload = Depends(get_current_user)):
    return {"success": True, "user": {"username": user.username, "is_admin": user.is_admin}}
