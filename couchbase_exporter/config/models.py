"""Pydantic configuration models for the exporter."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Tuple
import re

DEFAULT_NODE_URL = "http://localhost:8091"
DEFAULT_LISTEN_ADDRESS = ":9131"
DEFAULT_TELEMETRY_PATH = "/metrics"

_LISTEN_ADDRESS = re.compile(r'^(?P<host>\[[^\]]+\]|[^:]*):(?P<port>\d{1,5})$')


class NodeConfig(BaseModel):
    """Couchbase node to poll."""
    url: str = DEFAULT_NODE_URL
    name: Optional[str] = None  # Hostname prefix filter; None collects all nodes
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v

    @field_validator('name')
    @classmethod
    def empty_name_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class WebConfig(BaseModel):
    """HTTP server settings."""
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    telemetry_path: str = DEFAULT_TELEMETRY_PATH

    @field_validator('listen_address')
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Accept host:port, [ipv6]:port or :port."""
        match = _LISTEN_ADDRESS.match(v)
        if not match or not 0 < int(match.group('port')) < 65536:
            raise ValueError('Listen address must look like [host]:port')
        return v

    @field_validator('telemetry_path')
    @classmethod
    def validate_telemetry_path(cls, v: str) -> str:
        if not v.startswith('/'):
            raise ValueError('Telemetry path must start with /')
        if v == '/':
            raise ValueError('Telemetry path cannot be / (reserved for the landing page)')
        return v

    @property
    def host_port(self) -> Tuple[str, int]:
        """
        Split the listen address for the server.

        An empty host binds all interfaces.
        """
        match = _LISTEN_ADDRESS.match(self.listen_address)
        host = match.group('host').strip('[]') or '0.0.0.0'
        return host, int(match.group('port'))


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'Unknown log level: {v}')
        return v


class ExporterConfig(BaseModel):
    """Root configuration model for the exporter."""
    node: NodeConfig = Field(default_factory=NodeConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
