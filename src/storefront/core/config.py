# src/storefront/core/config.py
"""Application configuration loaded from the environment."""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

PLACEHOLDER_CLOUD_NAME = "your_cloud_name"


class MediaConfig(BaseModel):
    """Credentials for the Cloudinary media service."""

    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    base_url: str = "https://api.cloudinary.com/v1_1"
    timeout: float = 30.0

    @property
    def configured(self) -> bool:
        return bool(
            self.cloud_name
            and self.api_key
            and self.api_secret
            and self.cloud_name != PLACEHOLDER_CLOUD_NAME
        )


class AuthConfig(BaseModel):
    """JWT verification settings."""

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    cookie_name: str = "token"


class StoreConfig(BaseModel):
    """Top-level configuration for the storefront API."""

    project_name: str = "Ecommerce API"
    version: str = "1.0.0"
    description: str = (
        "Ecommerce API with product management, reviews and JWT authentication"
    )
    author: Optional[str] = None
    email: Optional[str] = None
    license_info: Optional[dict] = None
    debug_mode: bool = False

    api_prefix: str = "/api/v1"
    database_url: str = "sqlite:///./storefront.db"
    results_per_page: int = Field(default=12, gt=0)

    auth: AuthConfig = Field(default_factory=AuthConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "StoreConfig":
        """Build a config from environment variables (and a `.env` file when present)."""
        if os.getenv("NODE_ENV", os.getenv("APP_ENV", "")) != "production":
            load_dotenv(env_file or ".env", override=False)

        return cls(
            project_name=os.getenv("PROJECT_NAME", "Ecommerce API"),
            version=os.getenv("APP_VERSION", "1.0.0"),
            debug_mode=os.getenv("DEBUG", "false").lower() in ("1", "true", "yes"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./storefront.db"),
            results_per_page=int(os.getenv("RESULTS_PER_PAGE", "12")),
            auth=AuthConfig(
                jwt_secret=os.getenv("JWT_SECRET", "change-me"),
                jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            ),
            media=MediaConfig(
                cloud_name=os.getenv("CLOUDINARY_NAME"),
                api_key=os.getenv("CLOUDINARY_API_KEY"),
                api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            ),
        )
