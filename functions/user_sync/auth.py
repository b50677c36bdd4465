import os


def _is_truthy(v: str | None) -> bool:
    return (v or "").strip().lower() in ("1", "true", "yes", "on")


def is_auth_disabled() -> bool:
    return _is_truthy(os.getenv("AUTH_DISABLED")) or os.getenv("AUTH_MODE", "enabled").lower() == "disabled"


def internal_auth_ok(headers) -> bool:
    """
    Only other platform services may trigger a sync.

    Without INTERNAL_API_KEY every caller is rejected, unless auth is disabled (local dev).
    """
    if is_auth_disabled():
        return True
    internal_key = os.getenv("INTERNAL_API_KEY")
    if not internal_key:
        return False
    presented = headers.get("X-Internal-Api-Key") or headers.get("X-Internal-API-Key")
    return presented == internal_key
