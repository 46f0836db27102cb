"""Issuer configuration, loaded and validated once at startup."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, SecretStr, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuer.errors import ConfigurationError

SuiNetwork = Literal["mainnet", "testnet", "devnet", "localnet"]

FULLNODE_URLS = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}

class IssuerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Walrus
    publisher_url: str
    aggregator_url: str = "https://aggregator.walrus-testnet.walrus.space"

    # Sui
    sui_network: SuiNetwork
    sui_rpc_url: Optional[str] = None
    sui_package_id: str
    sui_admin_cap_id: str
    version_object_id: str
    admin_private_key: SecretStr
    sui_gas_budget: int = Field(default=50_000_000, gt=0)
    explorer_url: str = "https://suiscan.xyz"

    http_timeout: float = Field(default=60.0, gt=0)
    log_level: str = "INFO"

    @field_validator("publisher_url", "sui_package_id", "sui_admin_cap_id", "version_object_id")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("admin_private_key")
    @classmethod
    def _key_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("publisher_url", "aggregator_url", "explorer_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def rpc_url(self) -> str:
        return self.sui_rpc_url or FULLNODE_URLS[self.sui_network]

def load_settings(**overrides) -> IssuerSettings:
    """
    Build IssuerSettings from the environment (and .env), turning any pydantic
    error into a ConfigurationError. Only field names are reported, never values.
    """
    try:
        return IssuerSettings(**overrides)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]).upper() for err in e.errors()})
        raise ConfigurationError(
            f"Missing or invalid configuration: {', '.join(fields)}"
        ) from None
