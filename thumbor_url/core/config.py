import os

from pydantic import BaseModel, Field
from dotenv import find_dotenv, load_dotenv


class Settings(BaseModel):
    """Client settings."""
    # Thumbor server Configuration
    thumbor_server_url: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_SERVER_URL", "http://localhost:8888")
    )
    # Empty key means unsafe urls
    thumbor_security_key: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_SECURITY_KEY", "")
    )
    thumbor_signature_padding: bool = Field(
        default_factory=lambda: os.getenv("THUMBOR_SIGNATURE_PADDING", "true").lower() in ("true", "1", "t")
    )


def get_settings() -> Settings:
    """Read the settings from the environment.

    The nearest .env file, searched from the working directory up, is loaded
    first. Variables already set in the environment win over it.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return Settings()
