from .registry_service import (
    InMemoryRegistry,
    RegistryClient,
    SQLRegistry,
    create_registry,
)
from .response_service import ResponseComposer

__all__ = [
    "InMemoryRegistry",
    "RegistryClient",
    "SQLRegistry",
    "create_registry",
    "ResponseComposer",
]
