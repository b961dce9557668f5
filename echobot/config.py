from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(raw: Any) -> List[str]:
    """
    Normalize a list-ish env value.

    Supports:
      - list[str] (already parsed)
      - comma-separated string: "a, b,c"
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        items = [str(x).strip() for x in raw]
    else:
        items = [p.strip() for p in str(raw).split(",")]
    return [x for x in items if x]


class Settings(BaseSettings):
    """
    Central settings for the bot process and its HTTP API.

    Rules:
    - Everything comes from env / .env; nothing is read ad hoc elsewhere.
    - Normalize user-provided values here so call sites stay simple.
    - Bot-only requirements are checked by validate_for_bot(), not at import,
      so the API can run standalone without a Discord token.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # App identity
    env: str = Field(default="local", alias="APP_ENV")
    app_name: str = Field(default="echo-bot", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # HTTP API (uvicorn)
    host: str = Field(default="127.0.0.1", alias="HOST")
    api_port: int = Field(default=3000, alias="API_PORT")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    # Kept raw (comma-separated) so env parsing never tries to JSON-decode them
    cors_allow_origins_raw: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    # Discord
    discord_token: str = Field(default="", alias="DISCORD_TOKEN")
    discord_guild_id: Optional[int] = Field(default=None, alias="DISCORD_GUILD_ID")
    # If True, sync commands to a single guild (fast iteration). Requires DISCORD_GUILD_ID.
    discord_sync_guild_only: bool = Field(default=False, alias="DISCORD_SYNC_GUILD_ONLY")

    # Optional allow/deny lists for command modules (comma-separated module names)
    commands_allow_raw: str = Field(default="", alias="DISCORD_COMMANDS_ALLOW")
    commands_deny_raw: str = Field(default="", alias="DISCORD_COMMANDS_DENY")

    # AI (optional; /chat is disabled without a key)
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    ai_timeout_s: float = Field(default=30.0, alias="AI_TIMEOUT")

    # /ping pacing
    ping_delay_s: float = Field(default=2.0, alias="PING_DELAY_S")
    ping_max_count: int = Field(default=5, alias="PING_MAX_COUNT")

    # -------------------------
    # Validators / normalizers
    # -------------------------

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_log_level(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().upper()
        return s or "INFO"

    @field_validator("host", mode="before")
    @classmethod
    def _norm_host(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip()
        return s or "127.0.0.1"

    @field_validator("api_prefix", mode="before")
    @classmethod
    def _norm_api_prefix(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().strip("/")
        return f"/{s}" if s else ""

    @field_validator("discord_guild_id", mode="before")
    @classmethod
    def _norm_guild_id(cls, v: Any) -> Optional[int]:
        s = ("" if v is None else str(v)).strip()
        return int(s) if s else None

    @field_validator("discord_token", "openai_api_key", mode="before")
    @classmethod
    def _norm_secret(cls, v: Any) -> str:
        return ("" if v is None else str(v)).strip()

    # -------------------------
    # Derived helpers
    # -------------------------

    @property
    def is_prod(self) -> bool:
        return str(self.env).strip().lower() in ("prod", "production")

    @property
    def cors_allow_origins(self) -> List[str]:
        return _split_csv(self.cors_allow_origins_raw) or ["*"]

    @property
    def commands_allow(self) -> Optional[List[str]]:
        """None means "no allow list configured"."""
        return _split_csv(self.commands_allow_raw) or None

    @property
    def commands_deny(self) -> Optional[List[str]]:
        return _split_csv(self.commands_deny_raw) or None

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    def validate_for_bot(self) -> None:
        """
        Strict validation for bot boot safety.
        """
        if not self.discord_token:
            raise RuntimeError("DISCORD_TOKEN is not set in environment (.env).")

        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if self.log_level not in allowed:
            raise RuntimeError(f"LOG_LEVEL must be one of: {', '.join(sorted(allowed))}")

        if self.discord_guild_id is not None and self.discord_guild_id <= 0:
            raise RuntimeError("DISCORD_GUILD_ID must be a positive integer.")

        # Sync discipline: guild-only sync requires a guild id
        if self.discord_sync_guild_only and not self.discord_guild_id:
            raise RuntimeError("DISCORD_SYNC_GUILD_ONLY is true but DISCORD_GUILD_ID is not set.")

        if self.ping_delay_s < 0:
            raise RuntimeError("PING_DELAY_S must be >= 0.")
        if self.ping_max_count < 1:
            raise RuntimeError("PING_MAX_COUNT must be >= 1.")


settings = Settings()

__all__ = ["Settings", "settings"]
