from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    discord_token: str = Field(default="", description="Discord bot token")
    database_url: str = Field(default="sqlite:///data/bot.db", description="Database connection URL")

    environment: str = Field(default="development", description="Environment")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str | None = Field(default="log", description="Directory for rotating log files, unset to disable")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, description="Log file size before rotation")
    log_backup_count: int = Field(default=20, description="Number of rotated log files to keep")

    # Development settings
    debug: bool = Field(default=False, description="Echo SQL statements")

    # Startup
    ready_timeout_seconds: float = Field(
        default=10.0,
        description="Seconds allowed for the gateway to become ready before shutting down",
    )

    # Commands
    latency_probe_url: str = Field(
        default="https://discord.com/api/v10/gateway",
        description="URL requested by /ping to measure REST latency",
    )
    default_reason: str = Field(default="No reason provided.", description="Moderation reason when none is given")


# Global settings instance
settings = BotSettings()
