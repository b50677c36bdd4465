import pytest
from flask import Flask

from functions.user_sync.models import SyncedUser


@pytest.fixture()
def app() -> Flask:
    return Flask(__name__)


@pytest.fixture()
def fake_transport():
    from tests.fakes.oauth_transport import FakeTransportFactory

    return FakeTransportFactory()


@pytest.fixture()
def synced_user() -> SyncedUser:
    return SyncedUser(
        developer_identifier="6b4bd452-895d-4098-aa56-e6046b238e0f",
        account_identifier="160744112",
        user_identifier="513",
        email="tester1@goog-test.junittest.appdirect.co",
        first_name="John",
        last_name="Doe",
        user_name="tester1",
    )


@pytest.fixture(autouse=True)
def patch_user_sync_client(monkeypatch, fake_transport):
    """
    Route the cloud function's client through the in-memory transport and
    start every test from a clean environment.
    """
    import functions.user_sync.main as user_sync_main
    from functions.user_sync.client import UserSyncApiClient

    monkeypatch.setattr(user_sync_main, "client", UserSyncApiClient(fake_transport))
    for name in (
        "USER_SYNC_HOST_URL",
        "USER_SYNC_OAUTH_KEY",
        "USER_SYNC_OAUTH_SECRET",
        "INTERNAL_API_KEY",
        "AUTH_DISABLED",
        "AUTH_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
