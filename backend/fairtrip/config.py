from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Provider selection: "amadeus" | "travelpayouts" | "mock"
    flight_api_provider: str = "amadeus"

    # Amadeus
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"

    # Travelpayouts
    travelpayouts_token: str = ""
    travelpayouts_marker: str = ""
    travelpayouts_base_url: str = "https://api.travelpayouts.com"
    travelpayouts_currency: str = "EUR"
    travelpayouts_poll_attempts: int = 20

    # Rate limiting (token bucket) + request queue
    rate_limit_max_tokens: int = 10
    rate_limit_refill_interval_ms: int = 100
    request_queue_concurrency: int = 5

    # Retry
    retry_max_retries: int = 3
    retry_initial_delay: float = 2.0
    retry_max_delay: float = 16.0

    # Cache TTLs (minutes)
    cache_ttl_airports: int = 60
    cache_ttl_flights: int = 30
    cache_ttl_destinations: int = 60
    cache_ttl_travelpayouts_flights: int = 120
    cache_ttl_travelpayouts_destinations: int = 240

    # Search limits
    max_group_size: int = 10
    max_destinations_to_price: int = 15
    max_discovery_origins: int = 3
    search_timeout_seconds: float = 90.0

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def amadeus_configured(self) -> bool:
        return bool(self.amadeus_client_id and self.amadeus_client_secret)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
