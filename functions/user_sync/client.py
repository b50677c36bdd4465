"""
Client for the user sync API (``POST {host}/api/sync/v1/tasks``).

Tells the remote service that a user was assigned to, or unassigned from, a
purchased application. Each call is one signed POST; the outcome is either a
normal return or one of the failures in ``exceptions``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

try:  # pragma: no cover
    from .codec import encode_request
    from .exceptions import UNKNOWN_ERROR, UserSyncError, UserSyncTooManyRequestsError
    from .models import ErrorResponse, SyncedUser, SyncIntent
    from .transport import OAuthTransportFactory, RequestsOAuthTransportFactory, TransportResponse
except Exception:  # pragma: no cover
    from codec import encode_request
    from exceptions import UNKNOWN_ERROR, UserSyncError, UserSyncTooManyRequestsError
    from models import ErrorResponse, SyncedUser, SyncIntent
    from transport import OAuthTransportFactory, RequestsOAuthTransportFactory, TransportResponse

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


def _fallback_message(status_code: int, body: Optional[str]) -> str:
    if body and body.strip():
        return body.strip()
    return f"User sync request failed with HTTP status {status_code}"


def classify_response(response: TransportResponse) -> None:
    """
    Map a raw HTTP response to success or a typed failure.

      - 2xx: success, body ignored
      - 429: UserSyncTooManyRequestsError, body ignored
      - anything else: UserSyncError with the remote code/message, or
        UNKNOWN_ERROR when the body doesn't match {"code", "message"}
    """
    status = response.status_code
    if 200 <= status < 300:
        return None

    if status == 429:
        raise UserSyncTooManyRequestsError()

    if not response.body:
        raise UserSyncError(UNKNOWN_ERROR, _fallback_message(status, response.body))
    try:
        error = ErrorResponse.model_validate_json(response.body)
    except ValidationError:
        raise UserSyncError(UNKNOWN_ERROR, _fallback_message(status, response.body)) from None
    raise UserSyncError(error.code, error.message)


class UserSyncApiClient:
    def __init__(self, transport_factory: OAuthTransportFactory | None = None):
        self._transport_factory = transport_factory or RequestsOAuthTransportFactory()

    def sync_user_assignment(
        self, host_url: str, oauth_key: str, oauth_secret: str, synced_user: SyncedUser
    ) -> None:
        self._sync(host_url, oauth_key, oauth_secret, synced_user, SyncIntent.ASSIGN)

    def sync_user_unassignment(
        self, host_url: str, oauth_key: str, oauth_secret: str, synced_user: SyncedUser
    ) -> None:
        self._sync(host_url, oauth_key, oauth_secret, synced_user, SyncIntent.UNASSIGN)

    def _sync(
        self,
        host_url: str,
        oauth_key: str,
        oauth_secret: str,
        synced_user: SyncedUser,
        intent: SyncIntent,
    ) -> None:
        url, body = encode_request(host_url, synced_user, intent)
        transport = self._transport_factory.build(oauth_key, oauth_secret)
        response = transport.post(url, body, {"Content-Type": JSON_CONTENT_TYPE})
        classify_response(response)
