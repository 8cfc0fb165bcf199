"""
Domain validation and ownership classification.

The policy is applied in a fixed order and the first failing check decides
the outcome: syntax, then ownership, then registrable label length.
"""

import re

from ..config import Config
from ..models.domain_models import DomainStatus, ValidationOutcome

# Dot-separated labels of alphanumerics joined by internal hyphens, ending in
# an alphabetic label of at least two characters.
DOMAIN_PATTERN = re.compile(
    r"(?:[a-z0-9]+(?:-[a-z0-9]+)*\.)+[a-z]{2,}", re.IGNORECASE | re.ASCII
)


def is_valid_domain(domain: str) -> bool:
    """Check whether a string matches the domain label grammar."""
    if not domain:
        return False
    return DOMAIN_PATTERN.fullmatch(domain) is not None


def _normalize_suffix(tld: str) -> str:
    tld = tld.strip().lower()
    return tld if tld.startswith(".") else f".{tld}"


class DomainValidator:
    """Classifies raw queries against the configured ownership scheme."""

    def __init__(self, config: Config):
        self.min_label_length = config.min_label_length
        self.suffixes = frozenset(_normalize_suffix(tld) for tld in config.tlds)
        self.root_tld = config.root_tld.strip().lstrip(".").lower()
        self.categories = frozenset(c.strip().lower() for c in config.categories)

    def validate(self, query: str) -> ValidationOutcome:
        """Classify a trimmed query string. Never raises."""
        if not is_valid_domain(query):
            return ValidationOutcome.error(DomainStatus.SYNTAX_ERROR, query)

        labels = query.lower().split(".")

        if self.categories:
            status = self._check_categories(labels)
        else:
            status = self._check_suffixes(labels)
        if status is not None:
            return ValidationOutcome.error(status, query)

        if len(labels[0]) < self.min_label_length:
            return ValidationOutcome.error(DomainStatus.LENGTH_ERROR, query)

        return ValidationOutcome.valid(query, ".".join(labels))

    def _check_suffixes(self, labels: list[str]) -> DomainStatus | None:
        suffix = "." + ".".join(labels[1:])
        if suffix in self.suffixes:
            return None
        if len(labels) == 2:
            return DomainStatus.TOP_LEVEL_ERROR
        return DomainStatus.NOT_OWNED

    def _check_categories(self, labels: list[str]) -> DomainStatus | None:
        if len(labels) == 2:
            if labels[-1] != self.root_tld:
                return DomainStatus.TOP_LEVEL_ERROR
            return None
        if len(labels) == 3:
            if labels[-1] != self.root_tld or labels[1] not in self.categories:
                return DomainStatus.SECOND_LEVEL_ERROR
            return None
        return DomainStatus.NOT_OWNED
