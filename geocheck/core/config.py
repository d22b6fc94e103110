"""Application configuration."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Brazil Geolocation Service"
    version: str = "0.1.0"
    api_prefix: str = "/api/v1"

    # CORS Settings
    cors_origins: list[str] = ["*"]  # Default to allow all in development
    cors_allow_credentials: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"  # nosec B104
    PORT: int = Field(default=3000, gt=0, le=65535)

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Geocoding provider credentials
    OPENCAGE_API_KEY: str | None = None

    # Geocoding resolution settings
    GEOCODING_PROVIDER_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Wall-clock bound for one provider, retries included",
    )
    GEOCODING_REQUEST_TIMEOUT: float = Field(
        default=5.0, gt=0, description="Network timeout for a single attempt"
    )
    GEOCODING_MAX_RETRIES: int = Field(default=3, ge=0)
    GEOCODING_RETRY_DELAY: float = Field(default=1.0, gt=0)

    # Outbound rate limit shared by all providers
    GEOCODING_RATE_LIMIT_REQUESTS: int = Field(default=10, gt=0)
    GEOCODING_RATE_LIMIT_PERIOD: float = Field(default=1.0, gt=0)
    GEOCODING_USER_AGENT: str = (
        "ServicoGeolocalizacaoBR-Online/2.0 (contato@empresa.com)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @model_validator(mode="after")
    def validate_origins(self) -> "Settings":
        """Validate CORS origins."""
        if self.cors_origins == ["*"]:
            self.cors_origins = [
                "http://localhost",
                "http://localhost:8000",
                "http://localhost:3000",
            ]
        return self

    @model_validator(mode="after")
    def validate_opencage_key(self) -> "Settings":
        """Treat a blank OpenCage key as not configured."""
        if self.OPENCAGE_API_KEY is not None and not self.OPENCAGE_API_KEY.strip():
            self.OPENCAGE_API_KEY = None
        return self

    @model_validator(mode="after")
    def validate_retry_delay(self) -> "Settings":
        """Retry delay cannot be shorter than the rate limiter slot."""
        slot = self.GEOCODING_RATE_LIMIT_PERIOD / self.GEOCODING_RATE_LIMIT_REQUESTS
        if self.GEOCODING_RETRY_DELAY < slot:
            raise ValueError(
                "GEOCODING_RETRY_DELAY must be greater than or equal to "
                f"the rate limit slot ({slot:.3f}s)"
            )
        return self


# Create settings instance
settings = Settings()
