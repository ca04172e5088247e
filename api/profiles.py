"""
Profiles and Login API

Endpoints:
- GET /api/profiles - Brand profiles available in the dashboard
- POST /api/login - Check dashboard credentials
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from seo_studio.auth import StaticCredentialVerifier
from seo_studio.profiles import BRAND_PROFILES

from .dependencies import get_credential_verifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Dashboard"])


class LoginRequest(BaseModel):
    username: str
    password: str


@router.get("/profiles")
async def list_profiles():
    return [p.to_dict() for p in BRAND_PROFILES]


@router.post("/login")
async def login(
    request: LoginRequest,
    verifier: StaticCredentialVerifier = Depends(get_credential_verifier),
):
    """Verify a username and password against the configured users."""
    if not verifier.verify(request.username, request.password):
        logger.info("Rejected dashboard login")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return {"authenticated": True, "username": request.username.strip().lower()}
