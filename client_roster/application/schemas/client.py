"""Pydantic DTOs (Data Transfer Objects) for the Client feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72


def _check_password_length(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > _MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {_MAX_PASSWORD_BYTES} bytes")
    return value


class ClientCreate(BaseModel):
    """Schema for creating a new client — password is required."""

    client_name: str = Field(..., min_length=1, max_length=255, examples=["Acme Retail"])
    domain_url: str = Field(..., min_length=1, max_length=255, examples=["https://acme.example.com"])
    client_id: str = Field(..., min_length=1, max_length=255, examples=["acme-001"])
    password: str = Field(..., min_length=1)
    latest_pull_date: datetime | None = None
    latest_pull_by: str | None = Field(None, max_length=255)
    gsos_version: str | None = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_length(value)


class ClientUpdate(BaseModel):
    """Schema for updating an existing client — all fields optional.

    Omitting ``password`` (or sending an empty one) keeps the stored
    credentials unchanged.
    """

    client_name: str | None = Field(None, min_length=1, max_length=255)
    domain_url: str | None = Field(None, min_length=1, max_length=255)
    client_id: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = None
    latest_pull_date: datetime | None = None
    latest_pull_by: str | None = Field(None, max_length=255)
    gsos_version: str | None = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def blank_password_means_keep(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return _check_password_length(value)


class ClientResponse(BaseModel):
    """Schema returned to the dashboard.

    The password hash is never serialised; ``original_password`` is the
    decrypted display copy.
    """

    id: int
    client_name: str
    domain_url: str
    client_id: str
    original_password: str | None = None
    latest_pull_date: datetime | None
    latest_pull_by: str | None
    gsos_version: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientCreatedResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str
