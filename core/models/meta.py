"""Meta fields: named, optionally visible extension values attached to an entity."""

from typing import Any

from pydantic import BaseModel, Field


class MetaField(BaseModel):
    """One name/value pair attached to a customer, project or activity."""

    name: str = Field(..., min_length=1, max_length=50)
    value: Any = None
    visible: bool = False

    model_config = {"validate_assignment": True}


class MetaFieldsMixin(BaseModel):
    """
    Ordered mapping of meta field name to MetaField.

    Setting a field whose name already exists replaces it in place, so
    insertion order reflects first appearance.
    """

    meta_fields: dict[str, MetaField] = Field(default_factory=dict)

    def set_meta_field(self, meta: MetaField) -> None:
        """Attach or replace a meta field."""
        self.meta_fields[meta.name] = meta

    def get_meta_field(self, name: str) -> MetaField | None:
        """Meta field by name, None if not attached."""
        return self.meta_fields.get(name)

    def get_visible_meta_fields(self) -> list[MetaField]:
        """Meta fields flagged visible, in insertion order."""
        return [meta for meta in self.meta_fields.values() if meta.visible]
