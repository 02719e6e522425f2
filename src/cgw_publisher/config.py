"""Runtime settings loaded from CGW_* environment variables."""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from cgw_publisher.errors import ConfigError

DEFAULT_CGW_HOSTNAME = "https://developers.redhat.com/content-gateway/rest/admin"
DEFAULT_PUBLISHER_COMMAND = "push-cgw-metadata"


class Settings(BaseSettings):
    """Publisher settings.

    Credentials are injected by the pipeline from the content gateway
    secret as CGW_USERNAME and CGW_TOKEN.
    """

    model_config = SettingsConfigDict(env_prefix="CGW_", extra="ignore")

    hostname: str = Field(DEFAULT_CGW_HOSTNAME, min_length=1)
    username: Optional[str] = None
    token: Optional[SecretStr] = None
    publisher_command: str = Field(DEFAULT_PUBLISHER_COMMAND, min_length=1)
    fail_on_publish_error: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def require_credentials(self) -> tuple[str, str]:
        """Return (username, token) or raise ConfigError if either is missing."""
        missing = []
        if not self.username:
            missing.append("CGW_USERNAME")
        if self.token is None or not self.token.get_secret_value():
            missing.append("CGW_TOKEN")
        if missing:
            raise ConfigError(f"Missing content gateway credentials: {', '.join(missing)}")
        return self.username, self.token.get_secret_value()
