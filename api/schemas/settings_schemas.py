from typing import Literal

from api.schemas.base import CamelModel

Theme = Literal["light", "dark", "system"]
ColorPalette = Literal["indigo", "purple", "green", "blue", "minimalist"]
Size = Literal["small", "medium", "large"]
Spacing = Literal["compact", "comfortable"]


class UserSettings(CamelModel):
    theme: Theme = "dark"
    primary_color: ColorPalette = "indigo"
    font_size: Size = "medium"
    icon_size: Size = "medium"
    sidebar_collapsed: bool = False
    layout_spacing: Spacing = "comfortable"


class SettingsUpdate(CamelModel):
    """Partial update; unset fields keep their current value."""

    theme: Theme | None = None
    primary_color: ColorPalette | None = None
    font_size: Size | None = None
    icon_size: Size | None = None
    sidebar_collapsed: bool | None = None
    layout_spacing: Spacing | None = None
