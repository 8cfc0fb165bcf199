"""
Response composition for WHOIS replies.

Each method returns the list of byte chunks to write, one chunk per write.
Labels and line order are part of the wire format; clients parse them
positionally.
"""

from datetime import datetime, timezone
from typing import Optional

from ..config import Config
from ..models.domain_models import (
    Contact,
    DomainRecord,
    DomainStatus,
    ValidationOutcome,
)

CONTACT_FIELDS = (
    ("Name", "name"),
    ("Organization", "organization"),
    ("Street", "street"),
    ("City", "city"),
    ("State/Province", "state"),
    ("Postal Code", "postal_code"),
    ("Country", "country"),
    ("Phone", "phone"),
    ("Phone Ext", "phone_ext"),
    ("Fax", "fax"),
    ("Fax Ext", "fax_ext"),
    ("Email", "email"),
)

ERROR_MESSAGES = {
    DomainStatus.SYNTAX_ERROR: "Invalid query syntax: not a valid domain name.",
    DomainStatus.TOP_LEVEL_ERROR: (
        "The requested top-level domain is not served by this registry."
    ),
    DomainStatus.SECOND_LEVEL_ERROR: (
        "The requested second-level domain is not served by this registry."
    ),
    DomainStatus.LENGTH_ERROR: (
        "The requested domain name is too short; the registered label must be"
        " at least {min_length} characters."
    ),
    DomainStatus.NOT_OWNED: (
        "The requested domain is not registered through this registry."
    ),
}

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_date(value: Optional[datetime]) -> str:
    """Render a timestamp in UTC; naive values are taken as UTC already."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def _line(label: str, value: Optional[object]) -> str:
    return f"{label}: {'' if value is None else value}"


def _contact_lines(role: str, contact: Contact) -> list[str]:
    return [
        _line(f"{role} {label}", getattr(contact, attr))
        for label, attr in CONTACT_FIELDS
    ]


class ResponseComposer:
    """Renders validation outcomes and registry records into reply bytes."""

    def __init__(self, config: Config):
        self.tld_name = config.tld_name
        self.tld_whois_addr = config.tld_whois_addr
        self.min_label_length = config.min_label_length

    def _header(self) -> str:
        return (
            "\n%\n"
            f"%{self.tld_name} TLD whois server\n"
            f"% Please see 'whois -h {self.tld_whois_addr} help' for usage.\n"
            "%\n\n"
        )

    def help(self) -> list[bytes]:
        text = (
            "\n%\n"
            f"%{self.tld_name} TLD whois server\n"
            "%\n"
            "% Usage:\n"
            f"%   whois -h {self.tld_whois_addr} <domain>   look up a domain\n"
            f"%   whois -h {self.tld_whois_addr} help       show this message\n"
            "%\n"
            "% Send one query per connection. The server answers and closes.\n"
            "%\n"
        )
        return [text.encode("utf-8")]

    def error(self, outcome: ValidationOutcome) -> list[bytes]:
        """Render the reply for a rejected query."""
        if outcome.is_valid:
            raise ValueError("cannot render an error response for a valid outcome")
        message = ERROR_MESSAGES[outcome.status].format(
            min_length=self.min_label_length
        )
        return [f"{self._header()}{message}\n".encode("utf-8")]

    def no_match(self, query: str) -> list[bytes]:
        return [f'{self._header()}No match for "{query}".\n'.encode("utf-8")]

    def server_failure(self) -> list[bytes]:
        """Generic reply when the registry cannot answer; no internal detail."""
        message = "The registry is temporarily unable to process this query."
        return [f"{self._header()}{message}\n".encode("utf-8")]

    def success(self, record: DomainRecord) -> list[bytes]:
        """Render the primary and extended blocks as two separate chunks."""
        registrar = record.registrar
        primary = [
            _line("Domain Name", record.domain),
            _line("Registry Domain ID", record.registry_id),
            _line("Updated Date", format_date(record.updated)),
            _line("Creation Date", format_date(record.created)),
            _line("Expiration Date", format_date(record.expires)),
            _line("Registrar", registrar.name),
            _line("Registrar URL", registrar.url),
            _line("Registrar Abuse Contact Email", registrar.abuse_email),
            _line("Registrar Abuse Contact Phone", registrar.abuse_phone),
            *_contact_lines("Registrant", record.registrant),
        ]

        extended = [
            *_contact_lines("Admin", record.admin),
            *_contact_lines("Tech", record.tech),
            *(_line("Name Server", ns) for ns in record.nameservers),
            "",
            _line("DNSSEC", record.dnssec),
        ]

        return [
            (self._header() + "\n".join(primary) + "\n").encode("utf-8"),
            ("\n" + "\n".join(extended) + "\n").encode("utf-8"),
        ]

    def compose(
        self, outcome: ValidationOutcome, record: Optional[DomainRecord] = None
    ) -> list[bytes]:
        """Dispatch on the outcome and the lookup result."""
        if not outcome.is_valid:
            return self.error(outcome)
        if record is None:
            return self.no_match(outcome.query)
        return self.success(record)
