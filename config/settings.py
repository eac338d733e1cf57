"""
Configuration settings for the Maydel catalog engine.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv(Path(__file__).parent.parent / ".env")


@dataclass
class StoreConfig:
    """Configuration for the hosted collection store (Supabase)."""

    supabase_url: Optional[str] = field(
        default_factory=lambda: os.getenv("SUPABASE_URL")
    )
    supabase_key: Optional[str] = field(
        default_factory=lambda: os.getenv("SUPABASE_KEY")
    )

    # Table names
    products_table: str = "products"
    colors_table: str = "product_colors"

    # The storefront never removed variants on product delete; the store's
    # foreign key decides. Turn this on to delete them explicitly first.
    cascade_variant_delete: bool = False


@dataclass
class UploadConfig:
    """Configuration for image hosting (Cloudinary unsigned uploads)."""

    cloud_name: Optional[str] = field(
        default_factory=lambda: os.getenv("CLOUDINARY_CLOUD_NAME")
    )
    upload_preset: Optional[str] = field(
        default_factory=lambda: os.getenv("CLOUDINARY_UPLOAD_PRESET")
    )
    folder: str = "maydel_fajas"
    api_base: str = "https://api.cloudinary.com/v1_1"
    timeout_seconds: float = 60.0

    @property
    def upload_url(self) -> str:
        """Endpoint for image uploads."""
        return f"{self.api_base}/{self.cloud_name}/image/upload"


@dataclass
class CatalogConfig:
    """Storefront catalog settings."""

    page_size: int = 16
    max_images: int = 5
    featured_limit: int = 6  # Products shown on the home page


@dataclass
class LoggingConfig:
    """Configuration for console output."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_to_console: bool = True

    @property
    def show_debug(self) -> bool:
        return self.log_level.upper() == "DEBUG"


@dataclass
class AppConfig:
    """Main configuration combining all settings."""

    store: StoreConfig = field(default_factory=StoreConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Default configuration instance
config = AppConfig()
