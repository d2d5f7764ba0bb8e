"""
Application configuration using Pydantic Settings
"""

from typing import Literal, Optional, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
)

CONFIG_FILE_NAME = ".image-toolkit.json"

ImageFormatName = Literal["webp", "jpeg", "png", "avif"]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Image Toolkit API"
    api_description: str = "Image processing tools for automated clients"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Project root; every input/output path is resolved against it
    root: str = "."

    # Processing defaults
    default_format: ImageFormatName = "webp"
    default_max_width: int = Field(default=1920, ge=1, le=10000)
    default_quality: int = Field(default=100, ge=1, le=100)
    save_metadata: bool = True
    embed_exif: bool = False

    # Upload Settings
    max_file_size: int = 50 * 1024 * 1024  # 50MB

    # Placeholder image source (Picsum compatible)
    placeholder_base_url: str = "https://picsum.photos"
    download_timeout: int = 30

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: Optional[str] = "data/app.log"

    @field_validator("default_format", mode="before")
    @classmethod
    def normalize_default_format(cls, v):
        """Accept "jpg" and mixed case for the default format.

        Example:
            >>> normalize_default_format("JPG")
            'jpeg'
        """
        if isinstance(v, str):
            v = v.strip().lower()
            if v == "jpg":
                return "jpeg"
        return v

    @field_validator("placeholder_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "json_file": CONFIG_FILE_NAME,
        "json_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Priority: init kwargs > env > .env > project config file > defaults
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def processing_defaults(self) -> dict:
        """Subset of settings written by `write_default_config`."""
        return {
            "root": ".",
            "default_format": self.default_format,
            "default_max_width": self.default_max_width,
            "default_quality": self.default_quality,
            "save_metadata": self.save_metadata,
            "embed_exif": self.embed_exif,
        }


# Global settings instance
settings = Settings()
