# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edgylink.columns import ExtraColumn, coerce_extra_column
from edgylink.dependencies import get_service, has_service, register_service
from edgylink.exceptions import LinkManyConfigurationError
from edgylink.logger import LogFormat, LogLevel


class LinkManySettings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="EDGYLINK_",
        extra="ignore",
    )

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat | str = LogFormat.TEXT_LIGHT

    # Behavior defaults
    delete_on_unlink: bool = True
    atomic: bool = False

    @classmethod
    def from_env_file(cls, env_file: str):
        """Create settings with custom env file path."""
        return cls(_env_file=env_file)

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if isinstance(v, str) and v in [item.value for item in LogFormat]:
            return LogFormat(v)
        return v


def init_settings(env_file: str | None = None) -> LinkManySettings:
    if not has_service(LinkManySettings):
        settings = (
            LinkManySettings.from_env_file(env_file) if env_file else LinkManySettings()
        )
        register_service(settings, LinkManySettings)

        return settings

    return get_service(LinkManySettings)


def get_settings() -> LinkManySettings:
    return init_settings()


class LinkManyConfig(BaseModel):
    """
    Configuration of one many-to-many link behavior.

    Example:
        LinkManyConfig(
            relation="groups",
            reference_attribute="group_ids",
            extra_columns={
                "type": "user-defined",
                "created_at": lambda: datetime.now(),
                "category_id": lambda group: group.category_id,
            },
        )
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
    )

    relation: str
    reference_attribute: str
    extra_columns: dict[str, ExtraColumn] = Field(default_factory=dict)
    delete_on_unlink: bool = Field(default_factory=lambda: get_settings().delete_on_unlink)
    atomic: bool = Field(default_factory=lambda: get_settings().atomic)

    @field_validator("relation", "reference_attribute")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must be a non-empty string")
        return v

    @field_validator("extra_columns", mode="before")
    @classmethod
    def validate_extra_columns(cls, v: Any) -> dict[str, ExtraColumn]:
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError(f"extra_columns must be a mapping, got: {type(v).__name__}")
        return {column: coerce_extra_column(value) for column, value in v.items()}

    @classmethod
    def build(cls, value: "LinkManyConfig | dict[str, Any]") -> "LinkManyConfig":
        """Validate a config, turning pydantic errors into configuration errors."""
        if isinstance(value, cls):
            return value

        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise LinkManyConfigurationError(
                f"Invalid link many configuration: {e}"
            ) from e


__all__ = [
    "LinkManySettings",
    "LinkManyConfig",
    "init_settings",
    "get_settings",
]
