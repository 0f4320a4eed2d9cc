"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./sellerhub.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class AssetHostSettings(BaseModel):
    """Connection details for the ImageKit media host."""

    url_endpoint: Optional[str] = None
    public_key: str = ""
    private_key: str = ""
    upload_url: str = "https://upload.imagekit.io/api/v1/files/upload"
    api_url: str = "https://api.imagekit.io/v1"
    list_limit: int = Field(default=1000, ge=1, le=1000)
    timeout: float = 60.0
    product_folder: str = "/products"
    logo_folder: str = "/app-assets"


class UploadSettings(BaseModel):
    logo_max_bytes: int = 5 * 1024 * 1024
    product_image_max_bytes: int = 10 * 1024 * 1024
    logo_swap_attempts: int = 3


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "SellerHub Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    asset_host: AssetHostSettings = AssetHostSettings()
    uploads: UploadSettings = UploadSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def asset_endpoint(self) -> Optional[str]:
        return self.asset_host.url_endpoint or None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
