from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from .domain.errors import ConfigurationError

SANDBOX_USERNAME = "sandbox"

REQUIRED_FIELDS = frozenset({"at_api_key", "at_username"})
# "missing" when unset, "value_error" when blank
REQUIRED_ERROR_TYPES = frozenset({"missing", "value_error"})


class Settings(BaseSettings):
    """Dispatcher settings loaded from environment."""

    # Service
    service_name: str = "sms-dispatch"
    log_level: str = "INFO"

    # Africa's Talking
    at_api_key: str
    at_username: str
    at_sender: str | None = None
    at_api_base_url: str | None = None  # Overrides the sandbox/live host

    @field_validator("at_api_key", "at_username", mode="before")
    @classmethod
    def require_non_empty(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

    @field_validator("at_sender", "at_api_base_url", mode="before")
    @classmethod
    def blank_as_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_sandbox(self) -> bool:
        return self.at_username == SANDBOX_USERNAME

    class Config:
        env_file = ".env"
        case_sensitive = False
        frozen = True
        extra = "ignore"  # .env is shared with other processes


def load_settings(**overrides) -> Settings:
    """
    Build settings from the environment.

    Raises:
        ConfigurationError: If AT_API_KEY or AT_USERNAME is missing or blank,
            or any setting has an invalid value
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        required = sorted(
            {
                str(err["loc"][0]).upper()
                for err in e.errors()
                if err.get("loc")
                and err["loc"][0] in REQUIRED_FIELDS
                and err["type"] in REQUIRED_ERROR_TYPES
            }
        )
        if required and len(required) == e.error_count():
            raise ConfigurationError(
                f"{', '.join(required)} environment variable is required. Check your .env file."
            ) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return load_settings()
