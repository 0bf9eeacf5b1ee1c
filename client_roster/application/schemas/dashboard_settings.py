"""Pydantic DTOs for persisted dashboard display settings."""

from typing import Literal

from pydantic import BaseModel, Field

ThemeColor = Literal["blue", "purple", "green", "orange", "red", "teal"]
Language = Literal["en", "es", "fr"]


class DashboardSettings(BaseModel):
    """Full set of display settings with their defaults."""

    dark_mode: bool = False
    notifications: bool = True
    table_page_size: int = Field(10, ge=5, le=100)
    language: Language = "en"
    theme_color: ThemeColor = "blue"


class DashboardSettingsUpdate(BaseModel):
    """Partial update — unknown keys are rejected."""

    dark_mode: bool | None = None
    notifications: bool | None = None
    table_page_size: int | None = Field(None, ge=5, le=100)
    language: Language | None = None
    theme_color: ThemeColor | None = None

    model_config = {"extra": "forbid"}
