"""Application settings loaded from environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_prefix": "SALES_ANALYTICS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # "" = console only

    # Report shape
    top_products_limit: int = 10

    # What to do with a line item whose SKU is not in the product list
    unknown_product_policy: Literal["skip", "raise"] = "skip"

    # Reference bonus policy: share of profit paid per rank
    top_bonus_rate: float = 0.15  # rank 0
    podium_bonus_rate: float = 0.10  # ranks 1 and 2
    default_bonus_rate: float = 0.05
    last_place_bonus_rate: float = 0.0


settings = Settings()
