"""Region and credential configuration for the S3 object store."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError, field_validator

from bucketlog.exceptions import ConfigurationError


class Region(Enum):
    """Supported S3 storage regions. The value is the AWS region name."""

    US_EAST_1 = "us-east-1"
    US_EAST_2 = "us-east-2"
    US_WEST_1 = "us-west-1"
    US_WEST_2 = "us-west-2"
    CA_CENTRAL_1 = "ca-central-1"
    EU_WEST_1 = "eu-west-1"
    EU_WEST_2 = "eu-west-2"
    EU_WEST_3 = "eu-west-3"
    EU_CENTRAL_1 = "eu-central-1"
    EU_NORTH_1 = "eu-north-1"
    AP_SOUTH_1 = "ap-south-1"
    AP_NORTHEAST_1 = "ap-northeast-1"
    AP_NORTHEAST_2 = "ap-northeast-2"
    AP_SOUTHEAST_1 = "ap-southeast-1"
    AP_SOUTHEAST_2 = "ap-southeast-2"
    SA_EAST_1 = "sa-east-1"

    @classmethod
    def parse(cls, value: Region | str) -> Region:
        """Accept a Region or a region name like ``"us-east-2"``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(f"unsupported region: {value!r}") from None


class Credentials(BaseModel):
    """Static access key credentials handed to the S3 client."""

    model_config = ConfigDict(frozen=True)

    access_key: str
    secret_key: SecretStr
    session_token: SecretStr | None = None

    @field_validator("access_key")
    @classmethod
    def _access_key_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("access_key must not be blank")
        return v

    @field_validator("secret_key")
    @classmethod
    def _secret_key_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("secret_key must not be blank")
        return v

    @classmethod
    def parse(cls, value: Credentials | Mapping[str, Any]) -> Credentials:
        """Validate *value*, raising ConfigurationError instead of ValidationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(dict(value))
        except (ValidationError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid credentials: {exc}") from exc

    @classmethod
    def from_env(cls) -> Credentials:
        """Read AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY / AWS_SESSION_TOKEN."""
        access_key = os.environ.get("AWS_ACCESS_KEY_ID")
        secret_key = os.environ.get("AWS_SECRET_ACCESS_KEY")
        if not access_key or not secret_key:
            raise ConfigurationError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set"
            )
        return cls.parse(
            {
                "access_key": access_key,
                "secret_key": secret_key,
                "session_token": os.environ.get("AWS_SESSION_TOKEN") or None,
            }
        )

    def as_client_kwargs(self) -> dict[str, str]:
        kwargs = {
            "aws_access_key_id": self.access_key,
            "aws_secret_access_key": self.secret_key.get_secret_value(),
        }
        if self.session_token is not None:
            kwargs["aws_session_token"] = self.session_token.get_secret_value()
        return kwargs
