"""User domain models."""

from typing import Any

from pydantic import BaseModel, Field


class UserPreference(BaseModel):
    """A single named user setting, e.g. hourly_rate."""

    name: str = Field(..., min_length=1, max_length=50)
    value: Any = None

    model_config = {"validate_assignment": True}


class User(BaseModel):
    """User who tracked time or generated an invoice."""

    id: int | None = None
    username: str = Field(..., min_length=1, max_length=180)
    alias: str | None = Field(None, max_length=60)
    title: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=180)
    enabled: bool = True
    preferences: list[UserPreference] = Field(default_factory=list)

    model_config = {"validate_assignment": True}

    @property
    def display_name(self) -> str:
        """Alias if set, username otherwise."""
        return self.alias or self.username

    def add_preference(self, preference: UserPreference) -> None:
        """Add a preference, replacing any existing one with the same name."""
        self.preferences = [p for p in self.preferences if p.name != preference.name]
        self.preferences.append(preference)

    def get_preference_value(self, name: str, default: Any = None) -> Any:
        """Value of the named preference, or default if unset."""
        for preference in self.preferences:
            if preference.name == name:
                return preference.value
        return default
