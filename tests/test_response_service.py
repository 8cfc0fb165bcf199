from datetime import datetime, timedelta, timezone

import pytest

from tldwhois.models.domain_models import Contact, DomainStatus, ValidationOutcome
from tldwhois.services.response_service import ResponseComposer, format_date

HEADER = (
    "\n%\n"
    "%GE TLD whois server\n"
    "% Please see 'whois -h whois.nic.ge help' for usage.\n"
    "%\n\n"
)


@pytest.fixture
def composer(flat_config):
    return ResponseComposer(flat_config)


def _text(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8")


class TestFormatDate:
    """Test cases for timestamp rendering."""

    def test_aware_datetime_converted_to_utc(self):
        tz = timezone(timedelta(hours=4))
        assert format_date(datetime(2024, 1, 2, 7, 0, 0, tzinfo=tz)) == "2024-01-02T03:00:00Z"

    def test_naive_datetime_taken_as_utc(self):
        assert format_date(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"

    def test_missing_date(self):
        assert format_date(None) == ""


class TestStaticResponses:
    """Test cases for help, error and failure responses."""

    def test_help(self, composer):
        """Test the help text names the service and referral address."""
        chunks = composer.help()

        assert len(chunks) == 1
        text = _text(chunks)
        assert "GE TLD whois server" in text
        assert "whois -h whois.nic.ge help" in text

    def test_each_error_kind_has_its_own_body(self, composer):
        """Test every error status renders a distinct single-chunk body."""
        bodies = set()
        for status in DomainStatus:
            if status is DomainStatus.VALID:
                continue
            chunks = composer.error(ValidationOutcome.error(status, "bad query"))
            assert len(chunks) == 1
            text = _text(chunks)
            assert text.startswith(HEADER)
            bodies.add(text)

        assert len(bodies) == 5

    def test_length_error_mentions_minimum(self, composer):
        """Test the length error interpolates the configured minimum."""
        text = _text(
            composer.error(ValidationOutcome.error(DomainStatus.LENGTH_ERROR, "x.ge"))
        )
        assert "at least 2 characters" in text

    def test_error_body_does_not_echo_query(self, composer):
        """Test error boilerplate is static."""
        text = _text(
            composer.error(
                ValidationOutcome.error(DomainStatus.SYNTAX_ERROR, "<script>")
            )
        )
        assert "<script>" not in text

    def test_error_rejects_valid_outcome(self, composer):
        """Test that a valid outcome cannot be rendered as an error."""
        with pytest.raises(ValueError):
            composer.error(ValidationOutcome.valid("example.ge", "example.ge"))

    def test_no_match(self, composer):
        """Test the no-match body echoes the queried string."""
        text = _text(composer.no_match("example.ge"))

        assert text == HEADER + 'No match for "example.ge".\n'

    def test_server_failure_is_generic(self, composer):
        """Test the failure body carries no internal detail."""
        text = _text(composer.server_failure())

        assert text.startswith(HEADER)
        assert "temporarily unable" in text
        assert "Traceback" not in text


class TestSuccessResponse:
    """Test cases for rendering a resolved record."""

    def test_two_chunks(self, composer, make_record):
        """Test the primary and extended blocks are separate writes."""
        chunks = composer.success(make_record())

        assert len(chunks) == 2
        assert chunks[0].decode().startswith(HEADER)
        assert "Admin Name:" not in chunks[0].decode()
        assert chunks[1].decode().startswith("\nAdmin Name: ")

    def test_legacy_labels(self, composer, make_record):
        """Test the header and expiry labels match what existing clients parse."""
        primary = composer.success(make_record())[0].decode()

        assert "\n%GE TLD whois server\n" in primary
        assert "\nExpiration Date: 2026-03-01T09:30:00Z\n" in primary
        assert "Registry Expiry Date" not in primary

    def test_primary_block_field_order(self, composer, make_record):
        """Test the primary block lines in their exact order."""
        primary = composer.success(make_record())[0].decode()
        lines = primary[len(HEADER):].splitlines()

        assert lines == [
            "Domain Name: example.ge",
            "Registry Domain ID: D1234-GE",
            "Updated Date: 2023-06-15T12:00:00Z",
            "Creation Date: 2015-03-01T09:30:00Z",
            "Expiration Date: 2026-03-01T09:30:00Z",
            "Registrar: ACME",
            "Registrar URL: https://acme.example",
            "Registrar Abuse Contact Email: abuse@acme.example",
            "Registrar Abuse Contact Phone: +995.322000000",
            "Registrant Name: Nino Beridze",
            "Registrant Organization: Example LLC",
            "Registrant Street: 1 Rustaveli Ave",
            "Registrant City: Tbilisi",
            "Registrant State/Province: Tbilisi",
            "Registrant Postal Code: 0108",
            "Registrant Country: GE",
            "Registrant Phone: +995.322111111",
            "Registrant Phone Ext: 12",
            "Registrant Fax: +995.322111112",
            "Registrant Fax Ext: ",
            "Registrant Email: owner@example.ge",
        ]

    def test_extended_block_field_order(self, composer, make_record):
        """Test admin, tech, nameservers and DNSSEC lines in order."""
        extended = composer.success(make_record())[1].decode()
        lines = extended.splitlines()

        labels = [line.split(":", 1)[0] for line in lines if line]
        contact = [
            "Name", "Organization", "Street", "City", "State/Province",
            "Postal Code", "Country", "Phone", "Phone Ext", "Fax", "Fax Ext",
            "Email",
        ]
        assert labels == (
            [f"Admin {label}" for label in contact]
            + [f"Tech {label}" for label in contact]
            + ["Name Server", "Name Server", "DNSSEC"]
        )
        assert "Admin Name: Admin Person" in lines
        assert "Tech Email: tech@example.ge" in lines
        assert lines[-3:] == ["Name Server: ns2.example.ge", "", "DNSSEC: unsigned"]

    def test_nameservers_keep_stored_order(self, composer, make_record):
        """Test nameservers are not sorted."""
        record = make_record(nameservers=["z.ns.ge", "a.ns.ge", "m.ns.ge"])
        extended = composer.success(record)[1].decode()

        servers = [
            line[len("Name Server: "):]
            for line in extended.splitlines()
            if line.startswith("Name Server: ")
        ]
        assert servers == ["z.ns.ge", "a.ns.ge", "m.ns.ge"]

    def test_output_independent_of_field_construction_order(self, composer, make_record):
        """Test field order comes from the wire format, not the model."""
        forward = Contact(name="A", organization="B", city="C", email="D")
        backward = Contact(email="D", city="C", organization="B", name="A")

        assert composer.success(make_record(admin=forward)) == composer.success(
            make_record(admin=backward)
        )

    def test_registrar_line_for_short_domain(self, composer, make_record):
        """Test co.ge with registrar ACME renders the exact registrar line."""
        primary = composer.success(make_record(domain="co.ge"))[0].decode()

        assert "\nRegistrar: ACME\n" in primary
        assert "Domain Name: co.ge" in primary

    def test_empty_optional_fields(self, composer, make_record):
        """Test absent dates and contacts render empty values."""
        record = make_record(
            created=None, updated=None, expires=None, admin=Contact(), nameservers=[]
        )
        primary, extended = (chunk.decode() for chunk in composer.success(record))

        assert "Creation Date: \n" in primary
        assert "Admin Phone Ext: \n" in extended
        assert "Name Server" not in extended


class TestCompose:
    """Test cases for outcome dispatch."""

    def test_error_outcome(self, composer):
        outcome = ValidationOutcome.error(DomainStatus.TOP_LEVEL_ERROR, "example.com")
        assert composer.compose(outcome) == composer.error(outcome)

    def test_valid_without_record(self, composer):
        outcome = ValidationOutcome.valid("Example.GE", "example.ge")
        assert _text(composer.compose(outcome, None)).endswith(
            'No match for "Example.GE".\n'
        )

    def test_valid_with_record(self, composer, make_record):
        outcome = ValidationOutcome.valid("example.ge", "example.ge")
        record = make_record()
        assert composer.compose(outcome, record) == composer.success(record)
