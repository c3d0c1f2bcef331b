"""Token-gated echo route, unrelated to devices and presets"""

from typing import Optional
from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from loguru import logger

from home_sandbox import config
from home_sandbox.api.responses import success_response

router = APIRouter(tags=["user"])


@router.get("/user")
def current_user(authorization: Optional[str] = Header(None)):
    """Echo the stub user when the bearer token matches ``API_TOKEN``"""
    expected = config.API_TOKEN
    if not expected or authorization != f"Bearer {expected}":
        logger.warning("Rejected /user request with missing or invalid token")
        return JSONResponse(content={"success": False, "message": "Unauthenticated."}, status_code=401)
    return success_response({"name": "sandbox-user"})
