# autodiag/auth/auth.py
from jose import jwt, JWTError # type: ignore
from fastapi import Depends, HTTPException, Header
import httpx

from autodiag.config import SUPABASE_JWKS_URL

cached_keys = None

async def get_jwks():
    global cached_keys
    if cached_keys is None:
        if not SUPABASE_JWKS_URL:
            raise HTTPException(status_code=503, detail="Auth is not configured")
        async with httpx.AsyncClient() as client:
            cached_keys = (await client.get(SUPABASE_JWKS_URL)).json()
    return cached_keys

async def verify_token(authorization: str = Header(None)):
    if not authorization:
        raise HTTPException(401, "No token provided")

    token = authorization.replace("Bearer ", "")

    jwks = await get_jwks()

    try:
        payload = jwt.decode(token, jwks, algorithms=["RS256", "ES256"], options={"verify_aud": False})
        return payload
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

async def get_current_user_id(user=Depends(verify_token)) -> str:
    user_id = user.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")
    return user_id
