"""
booking_ledger.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the REST gateway and the local peer.
- Resolve crypto material paths from the Fabric test-network layout.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CRYPTO_PATH = "organizations/peerOrganizations/org1.example.com"


class Settings(BaseSettings):
    """
    One settings object shared by both processes:
    - `api_*`, identity and gateway fields drive the REST gateway
    - `peer_*` fields drive the local ledger peer
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOKING_", case_sensitive=False, populate_by_name=True
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "booking-ledger"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Client identity (pre-issued by the organization CA)
    msp_id: str = "Org1MSP"
    crypto_path: Path = Path(DEFAULT_CRYPTO_PATH)
    cert_path: Path | None = None
    key_path: Path | None = None
    tls_cert_path: Path | None = None

    # Gateway peer
    peer_endpoint: str = "localhost:7051"
    gateway_peer: str = "peer0.org1.example.com"
    peer_tls_enabled: bool = True

    # Plain CHANNEL_NAME / CHAINCODE_NAME win so existing deployment scripts keep working.
    channel_name: str = Field(
        default="mychannel",
        validation_alias=AliasChoices("CHANNEL_NAME", "BOOKING_CHANNEL_NAME", "channel_name"),
    )
    chaincode_name: str = Field(
        default="basic",
        validation_alias=AliasChoices("CHAINCODE_NAME", "BOOKING_CHAINCODE_NAME", "chaincode_name"),
    )

    # Gateway timeouts, seconds
    evaluate_timeout: float = 5.0
    endorse_timeout: float = 15.0
    submit_timeout: float = 5.0
    commit_status_timeout: float = 60.0

    # Local peer
    peer_host: str = "0.0.0.0"
    peer_port: int = 7051
    peer_database_url: str = "sqlite+aiosqlite:///./ledger.db"
    peer_tls_cert_file: Path | None = None
    peer_tls_key_file: Path | None = Field(default=None, repr=False)
    peer_allowed_msp_ids: list[str] = Field(default_factory=lambda: ["Org1MSP"])
    peer_msp_ca_cert_path: Path | None = None

    @model_validator(mode="after")
    def _resolve_crypto_paths(self) -> Settings:
        base = self.crypto_path
        if self.cert_path is None:
            self.cert_path = base / "users/User1@org1.example.com/msp/signcerts/cert.pem"
        if self.key_path is None:
            self.key_path = base / "users/User1@org1.example.com/msp/keystore"
        if self.tls_cert_path is None:
            self.tls_cert_path = base / "peers/peer0.org1.example.com/tls/ca.crt"
        return self

    @property
    def peer_base_url(self) -> str:
        scheme = "https" if self.peer_tls_enabled else "http"
        return f"{scheme}://{self.peer_endpoint}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The gateway and the peer read the same model so a single .env can describe a
# whole local network; in production only the gateway half is normally set.
