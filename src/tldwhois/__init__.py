"""
tldwhois - Authoritative WHOIS server for a single TLD registry.

Answers RFC 3912 queries over TCP: one domain name (or ``help``) per
connection, replied to with the registry record or a classified error.
"""

__version__ = "1.0.0"

from .config import Config
from .models import DomainRecord, DomainStatus, ValidationOutcome
from .server import ConnectionHandler, WhoisServer
from .services import InMemoryRegistry, ResponseComposer, SQLRegistry
from .utils import DomainValidator

__all__ = [
    "Config",
    "WhoisServer",
    "ConnectionHandler",
    "DomainValidator",
    "ResponseComposer",
    "InMemoryRegistry",
    "SQLRegistry",
    "DomainRecord",
    "DomainStatus",
    "ValidationOutcome",
]
