"""Project entities used for project-level access scoping."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Project:
    """Project inside a workspace."""

    id: UUID
    workspace_id: UUID
    name: str = ""


@dataclass
class ProjectMembership:
    """Explicit project grant, considered only for restricted members."""

    project_id: UUID
    user_id: str
