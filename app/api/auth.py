from fastapi import APIRouter
from fastapi.responses import JSONResponse
from jose import JWTError

from app.core.logger import logger
from app.core.security import clear_session_cookie, create_session_token, set_session_cookie
from app.models.schemas import SessionClaims

router = APIRouter()


@router.post("/jwt")
async def issue_token(claims: SessionClaims):
    """Sign the posted claims and hand them back as an httpOnly `token` cookie."""
    try:
        token = create_session_token(claims.model_dump())
    except JWTError as e:
        logger.error(f"❌ Failed to sign session token: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to create token"},
        )

    response = JSONResponse(content={"success": True, "message": "Token created and set in cookie"})
    set_session_cookie(response, token)
    return response


@router.post("/logout")
async def logout():
    response = JSONResponse(content={"success": True, "message": "Session cookie cleared"})
    clear_session_cookie(response)
    return response
