"""
Data models for WHOIS queries and registry records.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DomainStatus(str, Enum):
    """Classification of a query by the domain validator."""

    VALID = "valid"
    SYNTAX_ERROR = "syntax_error"
    TOP_LEVEL_ERROR = "top_level_error"
    SECOND_LEVEL_ERROR = "second_level_error"
    LENGTH_ERROR = "length_error"
    NOT_OWNED = "not_owned"


class ValidationOutcome(BaseModel):
    """Result of validating one query; exactly one per query."""

    model_config = ConfigDict(frozen=True)

    status: DomainStatus
    query: str
    domain: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status is DomainStatus.VALID

    @classmethod
    def valid(cls, query: str, domain: str) -> "ValidationOutcome":
        return cls(status=DomainStatus.VALID, query=query, domain=domain)

    @classmethod
    def error(cls, status: DomainStatus, query: str) -> "ValidationOutcome":
        if status is DomainStatus.VALID:
            raise ValueError("error outcome requires a non-valid status")
        return cls(status=status, query=query)


class Registrar(BaseModel):
    """Sponsoring registrar of a domain."""

    name: str = ""
    url: str = ""
    abuse_email: str = ""
    abuse_phone: str = ""


class Contact(BaseModel):
    """Registrant, admin or tech contact block."""

    name: str = ""
    organization: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    phone: str = ""
    phone_ext: Optional[str] = None
    fax: str = ""
    fax_ext: Optional[str] = None
    email: str = ""


class DomainRecord(BaseModel):
    """Registry entry for a single domain."""

    domain: str = Field(..., min_length=1, description="Domain name identifier")
    registry_id: str = ""
    status: str = ""
    dnssec: str = "unsigned"
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    expires: Optional[datetime] = None
    registrar: Registrar = Field(default_factory=Registrar)
    registrant: Contact = Field(default_factory=Contact)
    admin: Contact = Field(default_factory=Contact)
    tech: Contact = Field(default_factory=Contact)
    nameservers: list[str] = Field(default_factory=list)
