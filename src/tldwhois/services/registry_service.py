"""
Registry clients that resolve a domain name to its registration record.

``lookup`` returns ``None`` when the domain has no record and raises a
``RegistryError`` when the store itself fails.
"""

import json
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence, Union

import anyio
import anyio.lowlevel
import anyio.to_thread
import psycopg
import psycopg.errors
import structlog
from pydantic import ValidationError
from sqlalchemy import Engine, create_engine, select, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..config import Config
from ..exceptions import (
    RegistryConnectionError,
    RegistryDataError,
    RegistryError,
    RegistryTimeoutError,
)
from ..models.domain_models import Contact, DomainRecord, Registrar
from ..models.registry_tables import DomainRow, NameserverRow

logger = structlog.get_logger(__name__)


class RegistryClient(Protocol):
    """Interface the connection handler uses to resolve domains."""

    async def check(self) -> None: ...

    async def lookup(self, domain: str) -> Optional[DomainRecord]: ...

    async def close(self) -> None: ...


class InMemoryRegistry:
    """Read-only registry backed by a dict of records."""

    def __init__(self, records: Iterable[DomainRecord] = ()):
        self._records = {record.domain.lower(): record for record in records}

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryRegistry":
        """Load records from a JSON list, or an object with a ``records`` list."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("records", [])
        try:
            records = [DomainRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise RegistryDataError(
                "invalid_fixture",
                f"Invalid registry fixture: {path}",
                {"error": str(e)},
            ) from e
        logger.info("Loaded registry fixture", path=str(path), records=len(records))
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    async def check(self) -> None:
        return None

    async def lookup(self, domain: str) -> Optional[DomainRecord]:
        await anyio.lowlevel.checkpoint()
        return self._records.get(domain.lower())

    async def close(self) -> None:
        return None


def _contact_from_row(row: DomainRow, prefix: str) -> Contact:
    def value(name: str) -> str:
        return getattr(row, f"{prefix}_{name}") or ""

    return Contact(
        name=value("name"),
        organization=value("organization"),
        street=value("street"),
        city=value("city"),
        state=value("province"),
        postal_code=value("zip_code"),
        country=value("country"),
        phone=value("phone"),
        phone_ext=getattr(row, f"{prefix}_phone_ext"),
        fax=value("fax"),
        fax_ext=getattr(row, f"{prefix}_fax_ext"),
        email=value("email"),
    )


def record_from_row(row: DomainRow, nameservers: Sequence[str]) -> DomainRecord:
    """Build a domain record from a ``data`` row and its nameservers."""
    return DomainRecord(
        domain=row.dns,
        # The data table keys rows by name and has no separate handle
        registry_id=row.dns,
        status=row.status or "",
        dnssec=row.dnssec_status or "unsigned",
        created=row.creation_date,
        updated=row.updated_date,
        expires=row.expiration_date,
        registrar=Registrar(
            name=row.registrar_name or "",
            url=row.registrar_url or "",
            abuse_email=row.registrar_contact_email or "",
            abuse_phone=row.registrar_contact_phone or "",
        ),
        registrant=_contact_from_row(row, "registrant"),
        admin=_contact_from_row(row, "admin"),
        tech=_contact_from_row(row, "tech"),
        nameservers=list(nameservers),
    )


def _lookup_error(error: DBAPIError, domain: str) -> RegistryError:
    """Classify a driver error raised during a lookup."""
    details = {"domain": domain, "error": str(error)}
    if isinstance(error.orig, psycopg.errors.QueryCanceled):
        return RegistryTimeoutError(
            "lookup_timeout", "Registry statement timed out", details
        )
    if error.connection_invalidated or isinstance(error.orig, psycopg.OperationalError):
        return RegistryConnectionError(
            "registry_unavailable", "Registry database unavailable", details
        )
    return RegistryError("lookup_failed", "Registry lookup failed", details)


class SQLRegistry:
    """Registry backed by the PostgreSQL ``data``/``nameserver`` tables.

    SQLAlchemy is synchronous, so queries run in worker threads. The
    driver-level timeouts bound the thread even if the caller abandons it.
    """

    def __init__(self, config: Config, engine: Optional[Engine] = None):
        self.config = config
        if engine is None:
            timeout_ms = int(config.registry_timeout * 1000)
            engine = create_engine(
                config.database_url,
                pool_pre_ping=True,
                connect_args={
                    "connect_timeout": max(1, int(config.registry_timeout)),
                    "options": f"-c statement_timeout={timeout_ms}",
                },
            )
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def _check_sync(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    async def check(self) -> None:
        """Verify the database is reachable; used once at startup."""
        try:
            await anyio.to_thread.run_sync(self._check_sync)
        except SQLAlchemyError as e:
            raise RegistryConnectionError(
                "registry_unavailable",
                "Cannot connect to registry database",
                {"host": self.config.db_host, "error": str(e)},
            ) from e
        logger.info("Registry database reachable", host=self.config.db_host)

    def _lookup_sync(self, domain: str) -> Optional[tuple[DomainRow, list[str]]]:
        with self.session_factory() as session:
            row = session.get(DomainRow, domain)
            if row is None:
                return None
            nameservers = session.scalars(
                select(NameserverRow.nameserver)
                .where(NameserverRow.dns == domain)
                .order_by(NameserverRow.id)
            ).all()
            return row, list(nameservers)

    async def lookup(self, domain: str) -> Optional[DomainRecord]:
        try:
            found = await anyio.to_thread.run_sync(
                self._lookup_sync, domain, abandon_on_cancel=True
            )
        except DBAPIError as e:
            raise _lookup_error(e, domain) from e
        except SQLAlchemyError as e:
            raise RegistryError(
                "lookup_failed",
                "Registry lookup failed",
                {"domain": domain, "error": str(e)},
            ) from e

        if found is None:
            return None

        row, nameservers = found
        try:
            return record_from_row(row, nameservers)
        except ValidationError as e:
            raise RegistryDataError(
                "invalid_record",
                "Stored registry record is invalid",
                {"domain": domain, "error": str(e)},
            ) from e

    async def close(self) -> None:
        await anyio.to_thread.run_sync(self.engine.dispose)


def create_registry(
    config: Config, records_path: Optional[str] = None
) -> RegistryClient:
    """Build the registry client for the given configuration."""
    if records_path:
        return InMemoryRegistry.from_json_file(records_path)
    return SQLRegistry(config)
