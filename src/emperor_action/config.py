"""Application configuration using pydantic-settings.

A single RPC endpoint serves every request path, so GET and POST always see
the same ledger.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Solana RPC
    # ======================
    rpc_url: str = Field(
        default="http://127.0.0.1:8899", description="Solana JSON-RPC endpoint"
    )
    rpc_commitment: str = Field(default="confirmed", description="Commitment level for reads")
    rpc_timeout: float = Field(default=30.0, description="RPC request timeout in seconds")

    # ======================
    # Program
    # ======================
    idl_path: Optional[str] = Field(
        default=None, description="Path to the program IDL (defaults to the bundled one)"
    )

    # ======================
    # Solana Actions
    # ======================
    icon_url: str = Field(default="/icon.png", description="Icon shown by action clients")
    blockchain_id: str = Field(
        default="solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp",
        description="CAIP-2 chain id sent in X-Blockchain-Ids",
    )
    action_version: str = Field(default="2.4", description="Solana Actions spec version")

    def get_safe_dict(self) -> dict:
        """Return settings dict with credentials redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "rpc": {
                "url": self._redact_url(self.rpc_url),
                "commitment": self.rpc_commitment,
                "timeout": self.rpc_timeout,
            },
            "actions": {
                "blockchain_id": self.blockchain_id,
                "version": self.action_version,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials and API keys embedded in an RPC URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        if "api-key=" in url:
            base, _ = url.split("api-key=", 1)
            return f"{base}api-key=***"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
