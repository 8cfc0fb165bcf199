from .domain_models import (
    Contact,
    DomainRecord,
    DomainStatus,
    Registrar,
    ValidationOutcome,
)

__all__ = [
    "Contact",
    "DomainRecord",
    "DomainStatus",
    "Registrar",
    "ValidationOutcome",
]
