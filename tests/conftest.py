from datetime import datetime, timezone

import pytest

from tldwhois.config import Config
from tldwhois.models.domain_models import Contact, DomainRecord, Registrar

CATEGORIES = ("com", "edu", "gov", "org", "mil", "net", "pvt")


def _config(**overrides) -> Config:
    values = dict(
        bind_host="127.0.0.1",
        bind_port=0,
        read_timeout=2.0,
        max_request_length=64,
        registry_timeout=2.0,
        tld_name="GE",
        tld_whois_addr="whois.nic.ge",
        tlds=(".ge",),
        categories=(),
        root_tld="",
        min_label_length=2,
        db_host="localhost",
        db_port=5432,
        db_user="whois",
        db_password="hunter2",
        db_name="registry",
        db_sslmode="disable",
        log_level="INFO",
    )
    values.update(overrides)
    return Config(**values)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_config():
    """Factory for configs with test defaults; keyword overrides win."""
    return _config


@pytest.fixture
def flat_config() -> Config:
    return _config()


@pytest.fixture
def category_config() -> Config:
    return _config(tlds=(), categories=CATEGORIES, root_tld="ge")


@pytest.fixture
def make_record():
    """Factory for a fully populated domain record."""

    def factory(domain: str = "example.ge", **overrides) -> DomainRecord:
        values = dict(
            domain=domain,
            registry_id="D1234-GE",
            status="ok",
            dnssec="unsigned",
            created=datetime(2015, 3, 1, 9, 30, tzinfo=timezone.utc),
            updated=datetime(2023, 6, 15, 12, 0, tzinfo=timezone.utc),
            expires=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
            registrar=Registrar(
                name="ACME",
                url="https://acme.example",
                abuse_email="abuse@acme.example",
                abuse_phone="+995.322000000",
            ),
            registrant=Contact(
                name="Nino Beridze",
                organization="Example LLC",
                street="1 Rustaveli Ave",
                city="Tbilisi",
                state="Tbilisi",
                postal_code="0108",
                country="GE",
                phone="+995.322111111",
                phone_ext="12",
                fax="+995.322111112",
                fax_ext=None,
                email="owner@example.ge",
            ),
            admin=Contact(name="Admin Person", email="admin@example.ge"),
            tech=Contact(name="Tech Person", email="tech@example.ge"),
            nameservers=["ns1.example.ge", "ns2.example.ge"],
        )
        values.update(overrides)
        return DomainRecord(**values)

    return factory
