from urllib.parse import urlparse

import jwt
from fastapi import Header, HTTPException, status

from config import settings
from platform_client import PlatformSession
from services.session_service import load_offline_session

REAUTHORIZE_HEADER = "X-Shopify-API-Request-Failure-Reauthorize"
CLOCK_SKEW_SECONDS = 10


def _decode_session_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.shopify_api_secret,
            algorithms=["HS256"],
            audience=settings.shopify_api_key,
            leeway=CLOCK_SKEW_SECONDS,
            options={"verify_exp": True},
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session token"
        ) from exc


def shop_from_claims(claims: dict) -> str:
    dest = claims.get("dest") or ""
    shop = urlparse(dest).netloc or dest
    if not shop:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Session token has no shop"
        )
    return shop


async def get_current_session(
    authorization: str | None = Header(default=None, convert_underscores=False),
) -> PlatformSession:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing session token"
        )
    token = authorization.split(" ", 1)[1]
    shop = shop_from_claims(_decode_session_token(token))
    session = await load_offline_session(shop)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="App is not installed on this shop",
            headers={REAUTHORIZE_HEADER: "1"},
        )
    return session
