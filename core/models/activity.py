"""Activity domain model."""

from pydantic import Field

from core.models.meta import MetaFieldsMixin
from core.models.project import Project


class Activity(MetaFieldsMixin):
    """Kind of work being tracked. Activities without a project are global."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=150)
    project: Project | None = None
    comment: str | None = None
    visible: bool = True

    model_config = {"validate_assignment": True}

    @property
    def is_global(self) -> bool:
        """Whether the activity can be used with any project."""
        return self.project is None
