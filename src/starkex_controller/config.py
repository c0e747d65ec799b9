"""Application configuration using pydantic-settings.

The BIP39 seed phrase is the master secret every stark key pair is
derived from.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACCOUNT_MAPPING_KEY = "STARKWARE_ACCOUNT_MAPPING"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Wallet
    # ======================
    wallet_seed_phrase: Optional[str] = Field(
        default=None, description="BIP39 12/24 word seed phrase (master secret)"
    )
    account_mapping_key: str = Field(
        default=DEFAULT_ACCOUNT_MAPPING_KEY,
        description="Store key the path -> private key mapping is persisted under",
    )

    # ======================
    # Exchange
    # ======================
    chain_id: int = Field(default=1, description="EVM chain ID stamped into unsigned transactions")

    # ======================
    # Concurrency
    # ======================
    lock_timeout: float = Field(
        default=0.0, description="Seconds to wait for the key store lock (0 = wait forever)"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="127.0.0.1", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    @property
    def has_wallet(self) -> bool:
        """Check if wallet seed phrase is configured."""
        return bool(self.wallet_seed_phrase and len(self.wallet_seed_phrase.split()) >= 12)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "wallet_seed_phrase": "***" if self.wallet_seed_phrase else "(not set)",
            "wallet_configured": self.has_wallet,
            "account_mapping_key": self.account_mapping_key,
            "chain_id": self.chain_id,
            "lock_timeout": self.lock_timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
