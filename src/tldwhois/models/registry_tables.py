"""
SQLAlchemy mappings for the registry database.

Column names follow the existing ``data`` and ``nameserver`` tables.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DomainRow(Base):
    __tablename__ = "data"

    dns:             Mapped[str] = mapped_column("dns", String, primary_key=True)
    status_id:       Mapped[Optional[int]] = mapped_column("statusId", Integer, nullable=True)
    has_dnssec:      Mapped[Optional[bool]] = mapped_column("hasDnsSec", Boolean, nullable=True)
    registrar_id:    Mapped[Optional[int]] = mapped_column("registrarId", Integer, nullable=True)
    updated_date:    Mapped[Optional[datetime]] = mapped_column("updatedDate", DateTime(timezone=True), nullable=True)
    creation_date:   Mapped[Optional[datetime]] = mapped_column("creationDate", DateTime(timezone=True), nullable=True)
    expiration_date: Mapped[Optional[datetime]] = mapped_column("expirationDate", DateTime(timezone=True), nullable=True)
    status:          Mapped[Optional[str]] = mapped_column("status", String(10), nullable=True)
    dnssec_status:   Mapped[Optional[str]] = mapped_column("dnsSecStatus", String(20), nullable=True)

    # Registrar
    registrar_name:          Mapped[Optional[str]] = mapped_column("registrarName", String, nullable=True)
    registrar_url:           Mapped[Optional[str]] = mapped_column("registrarUrl", String, nullable=True)
    registrar_contact_email: Mapped[Optional[str]] = mapped_column("registrarContactEmail", String, nullable=True)
    registrar_contact_phone: Mapped[Optional[str]] = mapped_column("registrarContactPhone", String, nullable=True)

    # Registrant
    registrant_name:         Mapped[Optional[str]] = mapped_column("registrantName", String, nullable=True)
    registrant_organization: Mapped[Optional[str]] = mapped_column("registrantOrganization", String, nullable=True)
    registrant_street:       Mapped[Optional[str]] = mapped_column("registrantStreet", String, nullable=True)
    registrant_city:         Mapped[Optional[str]] = mapped_column("registrantCity", String, nullable=True)
    registrant_province:     Mapped[Optional[str]] = mapped_column("registrantProvince", String, nullable=True)
    registrant_zip_code:     Mapped[Optional[str]] = mapped_column("registrantZipCode", String, nullable=True)
    registrant_country:      Mapped[Optional[str]] = mapped_column("registrantCountry", String, nullable=True)
    registrant_phone:        Mapped[Optional[str]] = mapped_column("registrantPhone", String, nullable=True)
    registrant_phone_ext:    Mapped[Optional[str]] = mapped_column("registrantPhoneExt", String, nullable=True)
    registrant_fax:          Mapped[Optional[str]] = mapped_column("registrantFax", String, nullable=True)
    registrant_fax_ext:      Mapped[Optional[str]] = mapped_column("registrantFaxExt", String, nullable=True)
    registrant_email:        Mapped[Optional[str]] = mapped_column("registrantEmail", String, nullable=True)

    # Admin
    admin_name:         Mapped[Optional[str]] = mapped_column("adminName", String, nullable=True)
    admin_organization: Mapped[Optional[str]] = mapped_column("adminOrganization", String, nullable=True)
    admin_street:       Mapped[Optional[str]] = mapped_column("adminStreet", String, nullable=True)
    admin_city:         Mapped[Optional[str]] = mapped_column("adminCity", String, nullable=True)
    admin_province:     Mapped[Optional[str]] = mapped_column("adminProvince", String, nullable=True)
    admin_zip_code:     Mapped[Optional[str]] = mapped_column("adminZipCode", String, nullable=True)
    admin_country:      Mapped[Optional[str]] = mapped_column("adminCountry", String, nullable=True)
    admin_phone:        Mapped[Optional[str]] = mapped_column("adminPhone", String, nullable=True)
    admin_phone_ext:    Mapped[Optional[str]] = mapped_column("adminPhoneExt", String, nullable=True)
    admin_fax:          Mapped[Optional[str]] = mapped_column("adminFax", String, nullable=True)
    admin_fax_ext:      Mapped[Optional[str]] = mapped_column("adminFaxExt", String, nullable=True)
    admin_email:        Mapped[Optional[str]] = mapped_column("adminEmail", String, nullable=True)

    # Tech
    tech_name:         Mapped[Optional[str]] = mapped_column("techName", String, nullable=True)
    tech_organization: Mapped[Optional[str]] = mapped_column("techOrganization", String, nullable=True)
    tech_street:       Mapped[Optional[str]] = mapped_column("techStreet", String, nullable=True)
    tech_city:         Mapped[Optional[str]] = mapped_column("techCity", String, nullable=True)
    tech_province:     Mapped[Optional[str]] = mapped_column("techProvince", String, nullable=True)
    tech_zip_code:     Mapped[Optional[str]] = mapped_column("techZipCode", String, nullable=True)
    tech_country:      Mapped[Optional[str]] = mapped_column("techCountry", String, nullable=True)
    tech_phone:        Mapped[Optional[str]] = mapped_column("techPhone", String, nullable=True)
    tech_phone_ext:    Mapped[Optional[str]] = mapped_column("techPhoneExt", String, nullable=True)
    tech_fax:          Mapped[Optional[str]] = mapped_column("techFax", String, nullable=True)
    tech_fax_ext:      Mapped[Optional[str]] = mapped_column("techFaxExt", String, nullable=True)
    tech_email:        Mapped[Optional[str]] = mapped_column("techEmail", String, nullable=True)


class NameserverRow(Base):
    __tablename__ = "nameserver"

    id:         Mapped[int] = mapped_column(Integer, primary_key=True)
    dns:        Mapped[str] = mapped_column("dns", String(255), index=True)
    nameserver: Mapped[str] = mapped_column("nameserver", String(255))
