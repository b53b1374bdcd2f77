"""Application configuration."""
from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Food Ordering"
    log_level: str = "INFO"

    # Menu
    menu_file: Optional[str] = None  # Falls back to the bundled menu.yaml

    # Pricing
    free_delivery_threshold: Decimal = Decimal("25.00")
    delivery_fee: Decimal = Decimal("2.99")
    tax_rate: Decimal = Decimal("0.08")
    discount_threshold: Decimal = Decimal("50.00")
    discount_rate: Decimal = Decimal("0.10")

    # Delivery estimate
    delivery_transit_minutes: int = 15
    empty_cart_delivery_minutes: int = 30

    # Checkout
    submission_timeout_seconds: Optional[float] = 30.0
    submission_delay_seconds: float = 0.0  # Simulated processing time of the in-memory service

    # Sessions
    session_ttl_seconds: Optional[float] = 86400.0  # Idle time before a session expires; None keeps it

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
