from typing import Any, Dict, Optional

from supabase_client import get_supabase

TABLE_NAME = "shopify_sessions"


def fetch_session(session_id: str) -> Optional[Dict[str, Any]]:
    response = (
        get_supabase()
        .table(TABLE_NAME)
        .select("*")
        .eq("id", session_id)
        .limit(1)
        .execute()
    )
    items = response.data or []
    return items[0] if items else None


def upsert_session(record: Dict[str, Any]) -> Dict[str, Any]:
    response = get_supabase().table(TABLE_NAME).upsert(record).execute()
    if not response.data:
        raise RuntimeError("Failed to store session")
    return response.data[0]
