import json

from functions.user_sync.codec import USER_SYNC_PATH, build_url, encode_body, encode_request
from functions.user_sync.models import SyncedUser, SyncIntent

USER_FIELDS = {
    "developerIdentifier": "developer_identifier",
    "accountIdentifier": "account_identifier",
    "userIdentifier": "user_identifier",
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
    "userName": "user_name",
}


def test_build_url_appends_sync_path():
    assert build_url("http://localhost:8089") == "http://localhost:8089/api/sync/v1/tasks"


def test_build_url_tolerates_trailing_slash():
    assert build_url("https://marketplace.example.com/") == f"https://marketplace.example.com{USER_SYNC_PATH}"


def test_encode_body_carries_every_user_field(synced_user):
    for intent in SyncIntent:
        decoded = json.loads(encode_body(synced_user, intent).decode("utf-8"))
        assert set(decoded) == set(USER_FIELDS) | {"operationType"}
        for wire_name, attr in USER_FIELDS.items():
            assert decoded[wire_name] == getattr(synced_user, attr)
        assert decoded["operationType"] == intent.value


def test_assign_and_unassign_differ_only_in_operation_type(synced_user):
    assign = json.loads(encode_body(synced_user, SyncIntent.ASSIGN))
    unassign = json.loads(encode_body(synced_user, SyncIntent.UNASSIGN))
    assert assign.pop("operationType") == "ASSIGN"
    assert unassign.pop("operationType") == "UNASSIGN"
    assert assign == unassign


def test_missing_fields_are_still_emitted():
    decoded = json.loads(encode_body(SyncedUser(user_identifier="42"), SyncIntent.ASSIGN))
    assert decoded["userIdentifier"] == "42"
    assert decoded["email"] is None
    assert decoded["firstName"] is None


def test_body_is_utf8_without_ascii_escaping():
    user = SyncedUser(first_name="Žofia", last_name="Müller")
    body = encode_body(user, SyncIntent.ASSIGN)
    assert "Žofia".encode("utf-8") in body
    assert json.loads(body.decode("utf-8"))["lastName"] == "Müller"


def test_encode_request_returns_url_and_body(synced_user):
    url, body = encode_request("http://localhost:8089", synced_user, SyncIntent.UNASSIGN)
    assert url == "http://localhost:8089/api/sync/v1/tasks"
    assert json.loads(body)["operationType"] == "UNASSIGN"
