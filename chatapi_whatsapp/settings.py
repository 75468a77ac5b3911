from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for the project."""

    # Chat API gateway
    CHATAPI_API_URL: Optional[str] = None
    CHATAPI_TOKEN: Optional[str] = None
    CHATAPI_ROUTE_NAME: str = "chatapi"

    # HTTPX settings
    HTTPX_CLIENT_DEFAULT_TIMEOUT: int = 60
    HTTPX_CLIENT_VERIFY_SSL: bool = True

    class Config:
        extra = "ignore"


settings = Settings()
