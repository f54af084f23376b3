from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Optional .env at the project root, next to pyproject.toml.
# Without it, AGRO_API_KEY and friends come from the environment.
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Agro Monitoring API key, sent as the appid query parameter
    # An explicit api_key passed to AgroClient/AgroProvider takes precedence
    agro_api_key: str | None = None

    # Request and resource timeout in seconds, shared by every request
    request_timeout: float = 30.0

    # Raise ParserError on undecodable bodies instead of returning None
    strict_decoding: bool = False

    # Log level used by the CLI
    log_level: str = "WARNING"


settings = Settings()
