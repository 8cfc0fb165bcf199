from .validators import DomainValidator, is_valid_domain

__all__ = ["DomainValidator", "is_valid_domain"]
