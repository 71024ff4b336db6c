"""Runtime settings loaded from the process environment."""

from __future__ import annotations

from enum import Enum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class FailurePolicy(str, Enum):
    """How a failing partition fetch affects the whole listing call.

    The policy is fixed per deployment and applied to every partition of
    every call.
    """

    PARTIAL = "partial"
    FAIL_FAST = "fail_fast"


class ListingSettings(BaseSettings):
    """Account identity, folder layout and fetch behaviour.

    Environment variables keep the names used by the hosted function
    (``CLOUDINARY_*``, ``QUOTE_PREFIX``, ``SITE_BASE_URL``); settings specific
    to this service use the ``QUOTELIST_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    cloud_name: str | None = Field(default=None, validation_alias="CLOUDINARY_CLOUD_NAME")
    api_key: str | None = Field(default=None, validation_alias="CLOUDINARY_API_KEY")
    api_secret: SecretStr | None = Field(default=None, validation_alias="CLOUDINARY_API_SECRET")
    folder: str = Field(default="quotes", validation_alias="CLOUDINARY_FOLDER")
    quote_prefix: str = Field(default="q-", validation_alias="QUOTE_PREFIX")
    site_base_url: str = Field(default="", validation_alias="SITE_BASE_URL")
    fetch_timeout: float = Field(default=10.0, gt=0, validation_alias="QUOTELIST_FETCH_TIMEOUT")
    failure_policy: FailurePolicy = Field(
        default=FailurePolicy.PARTIAL, validation_alias="QUOTELIST_FAILURE_POLICY"
    )

    @field_validator("folder", "quote_prefix", mode="before")
    @classmethod
    def _blank_uses_default(cls, value, info):
        """Blank folder or prefix falls back to the default."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(
            self.cloud_name
            and self.api_key
            and self.api_secret
            and self.api_secret.get_secret_value()
        )

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless cloud name, key and secret are all set."""
        if not self.has_credentials:
            raise ConfigurationError("Missing Cloudinary config")
