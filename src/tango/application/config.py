from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from tango.domain.constants import CONFIG_DIR_NAME, DEFAULT_MAX_QUESTIONS


def config_file_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / "config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for tango.
    Supports loading from:
    1. Environment variables (TANGO_*)
    2. Config file (~/.config/tango/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="TANGO_",
        extra="ignore",
    )

    # Paths
    deck_dir: Path = Field(
        default_factory=lambda: Path.home() / CONFIG_DIR_NAME / "decks",
        validate_default=True,
    )

    # Review Settings
    max_questions: int = Field(default=DEFAULT_MAX_QUESTIONS, ge=0)
    seed: int | None = None

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Earlier sources win: CLI overrides, then env, then the TOML file
        toml_file = config_file_path()
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("deck_dir", mode="before")
    @classmethod
    def resolve_deck_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/tango/config.toml (if exists)
    3. Environment variables (TANGO_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer hands us every option; unset ones must not mask lower layers
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
