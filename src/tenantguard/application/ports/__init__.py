"""Application ports - interfaces for external adapters."""

from tenantguard.application.ports.schema_capabilities import SchemaCapabilities
from tenantguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "SchemaCapabilities",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
