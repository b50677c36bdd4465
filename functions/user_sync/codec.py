import json
from typing import Tuple

try:  # pragma: no cover
    from .models import SyncedUser, SyncIntent, UserSyncRequestPayload
except Exception:  # pragma: no cover
    from models import SyncedUser, SyncIntent, UserSyncRequestPayload

USER_SYNC_PATH = "/api/sync/v1/tasks"


def build_url(host_url: str) -> str:
    return f"{host_url.rstrip('/')}{USER_SYNC_PATH}"


def build_payload(user: SyncedUser, intent: SyncIntent) -> UserSyncRequestPayload:
    return UserSyncRequestPayload(operation_type=intent, **user.model_dump())


def encode_body(user: SyncedUser, intent: SyncIntent) -> bytes:
    # Every user field goes on the wire, null included.
    payload = build_payload(user, intent).model_dump(by_alias=True, mode="json")
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def encode_request(host_url: str, user: SyncedUser, intent: SyncIntent) -> Tuple[str, bytes]:
    return build_url(host_url), encode_body(user, intent)
