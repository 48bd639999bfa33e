"""
Storage components.

Components:
- AuroraPostgresComponent: Aurora PostgreSQL cluster with credentials secret
- DatabaseCredentials, DatabaseConnections: handles passed to consumers
"""

from infra.components.storage.aurora_postgres import (
    AuroraPostgresComponent,
    AuroraPostgresOutputs,
)
from infra.components.storage.handles import (
    CREDENTIAL_FIELDS,
    DatabaseConnections,
    DatabaseCredentials,
    json_key_reference,
)

__all__ = [
    "AuroraPostgresComponent",
    "AuroraPostgresOutputs",
    "CREDENTIAL_FIELDS",
    "DatabaseConnections",
    "DatabaseCredentials",
    "json_key_reference",
]
