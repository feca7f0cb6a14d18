"""Client configuration with environment variable loading.

Pydantic-based configuration for talking to the chat backend.
"""

import os

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from streamchat.stream.session import STREAM_PATH

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat backend client.

    Attributes:
        api_base_url: Backend base URL, without trailing slash.
        stream_path: Path of the streaming chat endpoint.
        connect_timeout: Seconds allowed to establish a connection.
        idle_timeout: Seconds a stream may go without delivering a chunk
            before it is treated as failed.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8080"),
        description="Chat backend base URL",
    )
    stream_path: str = Field(
        default=STREAM_PATH,
        description="Streaming chat endpoint path",
    )
    connect_timeout: float = Field(
        default_factory=lambda: float(os.getenv("CONNECT_TIMEOUT", "10")),
        gt=0.0,
        description="Connection timeout in seconds",
    )
    idle_timeout: float = Field(
        default_factory=lambda: float(os.getenv("STREAM_IDLE_TIMEOUT", "120")),
        gt=0.0,
        description="Maximum silence between stream chunks in seconds",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate the URL scheme and strip any trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "API base URL must start with http:// or https://. Set API_BASE_URL in .env"
            )
        return v

    def http_timeout(self) -> httpx.Timeout:
        """Build the client timeout; the read timeout doubles as the idle timeout."""
        return httpx.Timeout(self.idle_timeout, connect=self.connect_timeout)

    def create_http_client(self, **kwargs) -> httpx.AsyncClient:
        """Create an async HTTP client bound to the backend base URL."""
        return httpx.AsyncClient(base_url=self.api_base_url, timeout=self.http_timeout(), **kwargs)


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If a configured value is invalid.
    """
    return ClientConfig()
