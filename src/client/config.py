"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat backend connection and the
login credential pair.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat controller and its backend client.

    Attributes:
        api_base_url: Base URL of the chat backend.
        request_timeout: Timeout in seconds for every backend request.
        auth_username: Username accepted by the login gate.
        auth_password: Password accepted by the login gate.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the chat backend",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120.0")),
        gt=0.0,
        description="Timeout for backend requests in seconds",
    )
    auth_username: str = Field(
        default_factory=lambda: os.getenv("CHAT_USERNAME", ""),
        description="Username accepted by the login gate",
    )
    auth_password: str = Field(
        default_factory=lambda: os.getenv("CHAT_PASSWORD", ""),
        description="Password accepted by the login gate",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("auth_username", "auth_password")
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        """Validate that the login credential pair is configured."""
        if not v or not v.strip():
            raise ValueError(
                "Login credentials required. Set CHAT_USERNAME and CHAT_PASSWORD in .env"
            )
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the credential pair is not set.
    """
    return ClientConfig()
