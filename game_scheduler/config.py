import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from croniter import croniter
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigurationError(ValueError):
    """Raised when run options are missing or conflict with each other"""
    pass


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Command-line flags override these per run; validation here catches
    misconfiguration before any network call is made.
    """

    nhl_api_base_url: str = "https://api-web.nhle.com/v1"
    http_timeout_sec: float = 10.0

    gcp_project_id: str = "localproject"
    gcp_location: str = "us-south1"
    task_queue_name: str = "gameschedule"
    cloud_tasks_emulator: str = "localhost:8123"
    emulator_connect_timeout_sec: float = 10.0
    local_target_url: str = "http://host.docker.internal:8080"

    discord_webhook_url: str | None = None
    discord_user_id: str | None = None
    redis_url: str | None = None
    redis_queue_name: str = "game-notifications"

    schedule_cron: str = "0 5 * * 1"  # Mondays at 5 AM
    schedule_timezone: str = "UTC"
    schedule_misfire_grace_sec: int = 3600  # Allow 1 hour to run missed jobs

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("discord_webhook_url", "discord_user_id", "redis_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Treat empty environment values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("nhl_api_base_url", "local_target_url", "discord_webhook_url")
    @classmethod
    def validate_http_url(cls, value: str | None, info) -> str | None:
        """Validate URLs are HTTP/HTTPS."""
        if value is None:
            return value
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"{info.field_name} must be an HTTP/HTTPS URL: {value}")
        return value.rstrip("/") if info.field_name == "nhl_api_base_url" else value

    @field_validator("http_timeout_sec", "emulator_connect_timeout_sec")
    @classmethod
    def validate_timeouts(cls, value: float, info) -> float:
        """Ensure timeouts are positive."""
        if value <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return value

    @field_validator("schedule_misfire_grace_sec")
    @classmethod
    def validate_misfire_grace(cls, value: int) -> int:
        """Validate scheduler misfire grace period (seconds)."""
        if value < 0:
            raise ValueError("schedule_misfire_grace_sec must be >= 0")
        return value

    @field_validator("schedule_cron")
    @classmethod
    def validate_cron_expression(cls, value: str) -> str:
        """Validate cron expression is valid."""
        try:
            croniter(value)
            return value
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid cron expression '{value}': {exc}") from exc

    @field_validator("schedule_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Validate the scheduler timezone is a known IANA zone."""
        try:
            ZoneInfo(value)
            return value
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone '{value}'") from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return normalized

    @model_validator(mode="after")
    def validate_notification_configuration(self):
        """Validate cross-field configuration."""
        if self.discord_webhook_url and self.redis_url:
            logger.warning(
                "Both DISCORD_WEBHOOK_URL and REDIS_URL are set - Discord webhook takes precedence"
            )
        if self.discord_user_id and not self.discord_user_id.isdigit():
            raise ValueError("discord_user_id must be a numeric Discord user ID")
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.debug("Configuration loaded:")
        logger.debug("  NHL API: %s", self.nhl_api_base_url)
        logger.debug("  HTTP Timeout: %ss", self.http_timeout_sec)
        logger.debug(
            "  Queue: projects/%s/locations/%s/queues/%s",
            self.gcp_project_id,
            self.gcp_location,
            self.task_queue_name,
        )
        logger.debug("  Cloud Tasks Emulator: %s", self.cloud_tasks_emulator)
        logger.debug(
            "  Discord Webhook: %s",
            "configured" if self.discord_webhook_url else "disabled",
        )
        logger.debug("  Redis Notifications: %s", "configured" if self.redis_url else "disabled")
        logger.debug("  Schedule: %s (%s)", self.schedule_cron, self.schedule_timezone)


settings = CustomSettings()


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
