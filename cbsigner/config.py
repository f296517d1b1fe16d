from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from cbsigner.core.logging import setup_logging
from cbsigner.models.chain import Chain

_SECTION = "cbsigner"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return normalized

    def apply(self) -> None:
        setup_logging(level=self.level, json_output=self.json_output)


class SignerSettings(BaseSettings):
    """Process settings; ``CBSIGNER_*`` environment variables win over file values.

    Nested fields use ``__``, e.g. ``CBSIGNER_LOGGING__LEVEL=debug``.
    """

    chain: Chain = Chain.mainnet
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="CBSIGNER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("chain", mode="before")
    @classmethod
    def _parse_chain(cls, value: object) -> object:
        return Chain(value) if isinstance(value, str) else value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def _read_section(config_path: Path) -> dict[str, object]:
    document = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(document, dict):
        raise ValueError("config file must contain a top-level mapping")

    section = document.get(_SECTION, document)
    if not isinstance(section, dict):
        raise ValueError(f"{_SECTION} config section must be a mapping")
    return section


def load_config(path: str | Path = "config/cbsigner.yaml") -> SignerSettings:
    """Build settings from a YAML file, optionally nested under ``cbsigner:``."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    return SignerSettings(**_read_section(config_path))


__all__ = [
    "LoggingConfig",
    "SignerSettings",
    "load_config",
]
