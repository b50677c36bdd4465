from enum import Enum
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter


class SyncIntent(str, Enum):
    ASSIGN = "ASSIGN"
    UNASSIGN = "UNASSIGN"


class SyncedUser(BaseModel):
    # Pass-through value object; the remote service owns validation.
    model_config = ConfigDict(frozen=True)

    developer_identifier: Optional[str] = None
    account_identifier: Optional[str] = None
    user_identifier: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_name: Optional[str] = None


class UserSyncRequestPayload(BaseModel):
    # Wire shape for POST /api/sync/v1/tasks (camelCase on the wire).
    model_config = ConfigDict(populate_by_name=True)

    developer_identifier: Optional[str] = Field(default=None, alias="developerIdentifier")
    account_identifier: Optional[str] = Field(default=None, alias="accountIdentifier")
    user_identifier: Optional[str] = Field(default=None, alias="userIdentifier")
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    user_name: Optional[str] = Field(default=None, alias="userName")
    operation_type: SyncIntent = Field(alias="operationType")


class ErrorResponse(BaseModel):
    code: str
    message: str


class UserSyncCall(BaseModel):
    # Body of POST /sync/users/{assign|unassign}
    host_url: Optional[AnyHttpUrl] = None
    user: SyncedUser


class UserSyncResponse(BaseModel):
    status: str
    action: SyncIntent


_host_url_adapter = TypeAdapter(AnyHttpUrl)


def parse_host_url(value: str) -> str:
    """Validate an absolute http(s) base URL; raises pydantic.ValidationError."""
    return str(_host_url_adapter.validate_python(value.strip()))
