"""UI components for plantnav."""

from plantnav.ui.screens import HelpScreen, PlantDetailScreen
from plantnav.ui.styles import APP_CSS, dialog_css
from plantnav.ui.widgets import ZoneInput

__all__ = [
    "APP_CSS",
    "HelpScreen",
    "PlantDetailScreen",
    "ZoneInput",
    "dialog_css",
]
