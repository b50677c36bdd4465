import json
import os
from typing import Any, Dict, Tuple

import functions_framework
import requests
from flask import Response, make_response
from loguru import logger
from pydantic import ValidationError

# Support both "run as a package" (relative imports) and "run from this folder" (local imports).
try:  # pragma: no cover
    from .auth import internal_auth_ok
    from .client import UserSyncApiClient
    from .exceptions import UserSyncError, UserSyncTooManyRequestsError
    from .models import SyncIntent, UserSyncCall, UserSyncResponse, parse_host_url
except Exception:  # pragma: no cover
    from auth import internal_auth_ok
    from client import UserSyncApiClient
    from exceptions import UserSyncError, UserSyncTooManyRequestsError
    from models import SyncIntent, UserSyncCall, UserSyncResponse, parse_host_url

ACTIONS = {"assign": SyncIntent.ASSIGN, "unassign": SyncIntent.UNASSIGN}

client = UserSyncApiClient()


def _json_response(payload: Any, status: int = 200) -> Response:
    resp = make_response(json.dumps(payload, ensure_ascii=False), status)
    resp.headers["Content-Type"] = "application/json; charset=utf-8"
    resp.headers["Access-Control-Allow-Origin"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "POST,OPTIONS"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type,X-Internal-Api-Key"
    return resp


def _error(message: str, status: int = 400, extra: Dict[str, Any] | None = None) -> Response:
    body: Dict[str, Any] = {"error": message}
    if extra:
        body.update(extra)
    return _json_response(body, status=status)


def _oauth_credentials() -> Tuple[str, str]:
    return (
        (os.getenv("USER_SYNC_OAUTH_KEY") or "").strip(),
        (os.getenv("USER_SYNC_OAUTH_SECRET") or "").strip(),
    )


def _configured_host_url() -> str:
    raw = (os.getenv("USER_SYNC_HOST_URL") or "").strip()
    if not raw:
        return ""
    try:
        return parse_host_url(raw)
    except ValidationError:
        logger.error(f"USER_SYNC_HOST_URL is not an absolute http(s) URL: {raw!r}")
        return ""


@functions_framework.http
def user_sync(request):
    """
    Cloud Function HTTP entry point for pushing user assignment changes
    to the user sync service.

    Paths:
      - POST /sync/users/assign
      - POST /sync/users/unassign

    Body: {"host_url": "https://...", "user": {...}}; host_url falls back to USER_SYNC_HOST_URL.
    """
    if request.method == "OPTIONS":
        return _json_response({}, status=204)

    path = request.path or "/"
    parts = [p for p in path.split("/") if p]

    if len(parts) != 3 or parts[0] != "sync" or parts[1] != "users" or parts[2] not in ACTIONS:
        return _error("Not found", 404)

    if request.method != "POST":
        return _error("Method not allowed", 405)

    if not internal_auth_ok(request.headers):
        return _error("Forbidden", 403, {"code": "FORBIDDEN"})

    intent = ACTIONS[parts[2]]

    body_json = request.get_json(silent=True)
    if body_json is None:
        return _error("JSON body required", 400)
    try:
        call = UserSyncCall.model_validate(body_json)
    except ValidationError as e:
        return _error("Validation error", 400, {"details": e.errors(include_url=False, include_context=False)})

    host_url = str(call.host_url) if call.host_url else _configured_host_url()
    oauth_key, oauth_secret = _oauth_credentials()
    if not host_url or not oauth_key or not oauth_secret:
        logger.error("User sync is not configured (host URL or OAuth credentials missing)")
        return _error("User sync is not configured", 500)

    user = call.user
    logger.info(f"Syncing {intent.value} for user {user.user_identifier} (account {user.account_identifier})")
    try:
        if intent is SyncIntent.ASSIGN:
            client.sync_user_assignment(host_url, oauth_key, oauth_secret, user)
        else:
            client.sync_user_unassignment(host_url, oauth_key, oauth_secret, user)
    except UserSyncTooManyRequestsError as e:
        logger.warning(f"User sync rate limited for user {user.user_identifier}")
        return _error(str(e), 429, {"code": "TOO_MANY_REQUESTS"})
    except UserSyncError as e:
        logger.error(f"User sync failed for user {user.user_identifier}: {e.code} {e.message}")
        return _error(e.message, 502, {"code": e.code})
    except requests.RequestException as e:
        logger.error(f"User sync transport error for user {user.user_identifier}: {str(e)}")
        return _error(f"Transport error: {str(e)}", 502, {"code": "TRANSPORT_ERROR"})

    logger.info(f"User sync {intent.value} accepted for user {user.user_identifier}")
    return _json_response(UserSyncResponse(status="success", action=intent).model_dump(mode="json"))
