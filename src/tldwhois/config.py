"""
Configuration management for the WHOIS server.
"""

import os
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import URL


def _split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated environment value, dropping empty items."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Config:
    """Configuration for the WHOIS server.

    Built once at startup and shared read-only by every connection.
    """

    # Server configuration
    bind_host: str = field(default_factory=lambda: os.getenv("BIND_HOST", "0.0.0.0"))
    bind_port: int = field(default_factory=lambda: int(os.getenv("BIND_PORT", "43")))

    # Per-connection limits
    read_timeout: float = field(
        default_factory=lambda: float(os.getenv("READ_TIMEOUT", "10"))
    )
    max_request_length: int = field(
        default_factory=lambda: int(os.getenv("MAX_REQUEST_LENGTH", "64"))
    )
    registry_timeout: float = field(
        default_factory=lambda: float(os.getenv("REGISTRY_TIMEOUT", "5"))
    )

    # Service identity
    tld_name: str = field(default_factory=lambda: os.getenv("TLDNAME", ""))
    tld_whois_addr: str = field(default_factory=lambda: os.getenv("TLDWHOISADDR", ""))

    # Ownership policy
    tlds: tuple[str, ...] = field(
        default_factory=lambda: _split_list(os.getenv("TLDS", ""))
    )
    categories: tuple[str, ...] = field(
        default_factory=lambda: _split_list(os.getenv("TLD_CATEGORIES", ""))
    )
    root_tld: str = field(default_factory=lambda: os.getenv("ROOT_TLD", ""))
    min_label_length: int = field(
        default_factory=lambda: int(os.getenv("MIN_LABEL_LENGTH", "2"))
    )

    # Registry database
    db_host: str = field(default_factory=lambda: os.getenv("DBHOST", "localhost"))
    db_port: int = field(default_factory=lambda: int(os.getenv("DBPORT", "5432")))
    db_user: str = field(default_factory=lambda: os.getenv("DBUNAME", ""))
    db_password: str = field(default_factory=lambda: os.getenv("DBPSWD", ""))
    db_name: str = field(default_factory=lambda: os.getenv("DBNAME", ""))
    db_sslmode: str = field(default_factory=lambda: os.getenv("DBSSL", "disable"))

    # Logging configuration
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def uses_categories(self) -> bool:
        """True when ownership is decided by root TLD plus category label."""
        return bool(self.categories)

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL for the registry database."""
        return URL.create(
            "postgresql+psycopg",
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name or None,
            query={"sslmode": self.db_sslmode} if self.db_sslmode else {},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "bind_host": self.bind_host,
            "bind_port": self.bind_port,
            "read_timeout": self.read_timeout,
            "max_request_length": self.max_request_length,
            "registry_timeout": self.registry_timeout,
            "tld_name": self.tld_name,
            "tld_whois_addr": self.tld_whois_addr,
            "tlds": ",".join(self.tlds),
            "categories": ",".join(self.categories),
            "root_tld": self.root_tld,
            "min_label_length": self.min_label_length,
            "db_host": self.db_host,
            "db_port": self.db_port,
            "db_user": self.db_user,
            "db_password": self.db_password,
            "db_name": self.db_name,
            "db_sslmode": self.db_sslmode,
            "log_level": self.log_level,
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> None:
        """Validate configuration values."""
        if self.bind_port < 0 or self.bind_port > 65535:
            raise ValueError(f"Invalid port number: {self.bind_port}")

        if self.read_timeout <= 0:
            raise ValueError(f"Invalid read timeout: {self.read_timeout}")

        if self.registry_timeout <= 0:
            raise ValueError(f"Invalid registry timeout: {self.registry_timeout}")

        if self.max_request_length <= 0:
            raise ValueError(
                f"Invalid max request length: {self.max_request_length}"
            )

        if self.min_label_length < 1:
            raise ValueError(f"Invalid min label length: {self.min_label_length}")

        if self.uses_categories and not self.root_tld:
            raise ValueError("ROOT_TLD is required when TLD_CATEGORIES is set")

        if not self.uses_categories and not self.tlds:
            raise ValueError("TLDS must list at least one served TLD")

        if self.log_level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {self.log_level}")
