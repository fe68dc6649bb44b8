import asyncio
from typing import Any, Dict, Optional

from platform_client import PlatformSession
from repositories.sessions_repository import fetch_session, upsert_session
from security import decrypt_access_token, encrypt_access_token


def offline_session_id(shop: str) -> str:
    return f"offline_{shop}"


def _build_session(row: Dict[str, Any]) -> PlatformSession:
    return PlatformSession(
        shop=row["shop"],
        access_token=decrypt_access_token(row["access_token_encrypted"]),
        scope=row.get("scope"),
        is_online=row.get("is_online", False),
    )


async def load_offline_session(shop: str) -> Optional[PlatformSession]:
    row = await asyncio.to_thread(fetch_session, offline_session_id(shop))
    if not row or not row.get("access_token_encrypted"):
        return None
    return _build_session(row)


async def save_session(session: PlatformSession) -> PlatformSession:
    """Persist a session obtained by the install flow.

    Only offline sessions are stored; the access token never leaves this
    module unencrypted.
    """
    record = {
        "id": offline_session_id(session.shop),
        "shop": session.shop,
        "scope": session.scope,
        "is_online": session.is_online,
        "access_token_encrypted": encrypt_access_token(session.access_token),
    }
    row = await asyncio.to_thread(upsert_session, record)
    return _build_session(row)
