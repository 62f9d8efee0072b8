"""Schema capabilities port - optional columns of older deployments."""

from typing import Protocol


class SchemaCapabilities(Protocol):
    """Answers which optional schema features the catalog store has."""

    async def supports_project_access_scope(self) -> bool: ...
