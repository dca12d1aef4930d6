"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    DEFAULT_DOVES_ORACLE_URL,
    DEFAULT_ORACLE_SYMBOLS,
    JLP_CUSTODIES,
    JLP_POOL_ADDRESS,
    STABLECOIN_SYMBOLS,
)

load_dotenv()

CONFIG_ENV_VAR = "JLP_MONITOR_CONFIG"
CONFIG_TABLE = "jlp_monitor"


def _default_custody_symbols() -> dict[str, str]:
    return {address: symbol for symbol, address in JLP_CUSTODIES.items()}


class MonitorSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with JLP_MONITOR_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- pool ---
    pool_address: str = JLP_POOL_ADDRESS
    snapshot_path: Path | None = None
    custody_symbols: dict[str, str] = Field(default_factory=_default_custody_symbols)
    stablecoin_symbols: list[str] = Field(
        default_factory=lambda: list(STABLECOIN_SYMBOLS)
    )

    # --- oracle ---
    oracle_enabled: bool = True
    oracle_url: str = DEFAULT_DOVES_ORACLE_URL
    oracle_symbols: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ORACLE_SYMBOLS)
    )
    oracle_timeout: float = Field(default=10.0, gt=0)
    oracle_retries: int = Field(default=2, ge=0)

    # --- run ---
    global_timeout_seconds: float | None = 60.0
    fail_on_warnings: bool = False

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="JLP_MONITOR_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("stablecoin_symbols", "oracle_symbols")
    @classmethod
    def upper_symbols(cls, v: list[str]) -> list[str]:
        return [s.strip().upper() for s in v if s.strip()]

    @field_validator("custody_symbols")
    @classmethod
    def upper_custody_symbols(cls, v: dict[str, str]) -> dict[str, str]:
        return {address: symbol.strip().upper() for address, symbol in v.items()}

    @field_validator("oracle_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    local_config = Path("jlp-monitor.toml")
                    user_config = Path.home() / ".config" / "jlp-monitor" / "config.toml"
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    raise FileNotFoundError(f"Config file not found: {self._path}")

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [jlp_monitor]
                body = data.get(CONFIG_TABLE, data)
                if not isinstance(body, dict):
                    return {}
                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-serializable dict."""
        return self.model_dump(mode="json")

    @property
    def snapshot_path_required(self) -> Path:
        """Get snapshot_path, raising ValueError if not set."""
        if self.snapshot_path is None:
            raise ValueError("snapshot_path must be configured")
        return self.snapshot_path
