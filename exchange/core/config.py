from functools import lru_cache
from pydantic import AnyHttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from exchange.models.constants import CurrencyCode


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_API_KEY, HTTP_TIMEOUT_SECONDS, EXCHANGE_RATE_PROVIDER).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Exchange Calculator"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates / upstream
    exchange_api_base_url: AnyHttpUrl = "https://api.apilayer.com/currency_data/live"
    exchange_api_key: SecretStr = SecretStr("")  # must come from env / .env
    http_timeout_seconds: float = 5.0

    # Allowed: 'apilayer' (live HTTP quotes), 'static' (fixed offline rates)
    exchange_rate_provider: str = "apilayer"

    # Screen behaviour
    amount_ceiling: float = 10000
    min_grouping_digits: int = 2
    default_source: CurrencyCode = CurrencyCode.USD
    default_destination: CurrencyCode = CurrencyCode.KRW


    def init_post_load(self) -> None:
        """Validate cross-field settings."""
        allowed = {"apilayer", "static"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )
        if self.default_source == self.default_destination:
            raise ValueError("default_source and default_destination must differ")
        if self.amount_ceiling <= 0:
            raise ValueError("amount_ceiling must be positive")
        if self.http_timeout_seconds <= 0:
            raise ValueError("http_timeout_seconds must be positive")

    @property
    def api_key(self) -> str:
        return self.exchange_api_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
