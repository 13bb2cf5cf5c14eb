"""Roster server configuration via environment variables."""

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from roster.logic.settings import CLEAR_CONFIRM_SECONDS, JOIN_CONFIRM_SECONDS, RosterSettings
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class RosterServerSettings(BaseSettings):
    model_config = {"env_prefix": "ROSTER_"}

    log_dir: str | None = None
    cors_origins: list[str] = []
    max_request_bytes: int = Field(default=64 * 1024, ge=1024)
    clear_confirm_seconds: float = Field(default=CLEAR_CONFIRM_SECONDS, gt=0)
    join_confirm_seconds: float = Field(default=JOIN_CONFIRM_SECONDS, gt=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings

    def to_roster_settings(self) -> RosterSettings:
        return RosterSettings(
            clear_confirm_seconds=self.clear_confirm_seconds,
            join_confirm_seconds=self.join_confirm_seconds,
        )
