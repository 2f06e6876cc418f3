from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "dmserver"
    app_env: str = "development"

    database_url: str = "sqlite:///./dmserver.db"

    host: str = "0.0.0.0"
    port: int = 8000

    # TLS files are expected to exist already
    tls_certfile: str = "server.crt"
    tls_keyfile: str = "server.key"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
