"""
Configuration: client construction options and environment settings.
"""
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MiB = 1024 * 1024

# gRPC channel arguments applied unless overridden by ClientOptions.channel_options
DEFAULT_CHANNEL_OPTIONS: dict[str, Any] = {
    "grpc.keepalive_time_ms": 30_000,
    "grpc.keepalive_timeout_ms": 10_000,
    "grpc.max_receive_message_length": 64 * MiB,
    "grpc.max_send_message_length": 64 * MiB,
}


class TlsSettings(BaseModel):
    """PEM file paths; all optional. Key + chain together enable mutual TLS."""
    root_certificates: Optional[str] = None
    private_key: Optional[str] = None
    certificate_chain: Optional[str] = None

    @model_validator(mode="after")
    def _check_key_pair(self):
        if bool(self.private_key) != bool(self.certificate_chain):
            raise ValueError("tls.private_key and tls.certificate_chain must be set together")
        return self

    def read(self) -> tuple[Optional[bytes], Optional[bytes], Optional[bytes]]:
        """Return (root_certificates, private_key, certificate_chain) as bytes."""
        return (
            _read_pem(self.root_certificates),
            _read_pem(self.private_key),
            _read_pem(self.certificate_chain),
        )


def _read_pem(path: Optional[str]) -> Optional[bytes]:
    if not path:
        return None
    return Path(path).expanduser().read_bytes()


class ClientOptions(BaseModel):
    """Construction interface of the connection factory."""

    model_config = ConfigDict(extra="forbid")

    # gRPC target, e.g. "127.0.0.1:50051"
    address: str
    password: Optional[str] = None
    use_tls: bool = False
    tls: TlsSettings = Field(default_factory=TlsSettings)
    channel_options: dict[str, Any] = Field(default_factory=dict)
    default_deadline_ms: Optional[int] = Field(default=None, gt=0)
    enable_gzip: bool = False
    # Adds x-request-id metadata to every call when enabled
    propagate_request_id: bool = False
    log_calls: bool = True

    @field_validator("address")
    @classmethod
    def _validate_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address must be a non-empty host:port string")
        return v

    @field_validator("password")
    @classmethod
    def _empty_password_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def merged_channel_options(self) -> list[tuple[str, Any]]:
        merged = {**DEFAULT_CHANNEL_OPTIONS, **self.channel_options}
        return list(merged.items())


class ScintireteSettings(BaseSettings):
    """Environment-driven client settings (``SCINTIRETE_*``, nested with ``__``)."""

    address: str = "127.0.0.1:50051"
    password: Optional[str] = None
    use_tls: bool = False
    tls: TlsSettings = Field(default_factory=TlsSettings)
    channel_options: dict[str, Any] = Field(default_factory=dict)
    default_deadline_ms: Optional[int] = None
    enable_gzip: bool = False
    propagate_request_id: bool = False
    log_calls: bool = True
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SCINTIRETE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    def to_client_options(self) -> ClientOptions:
        return ClientOptions.model_validate(self.model_dump(exclude={"debug"}))
