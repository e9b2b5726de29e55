from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub REST API - GITHUB_API_URL is set by Actions runners (and GHES)
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    # Empty string = unauthenticated requests (60 req/hour)
    github_token: str = ""

    # HTTP transport
    request_timeout: float = 30.0
    connect_timeout: float = 5.0
    max_connections: int = 20
    max_keepalive_connections: int = 10
    http2: bool = True


settings = Settings()
