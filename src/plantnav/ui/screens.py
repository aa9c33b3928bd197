"""Modal screens for plantnav."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Label

from plantnav.repository import Plant
from plantnav.ui.styles import dialog_css


class HelpScreen(ModalScreen[None]):
    """Help screen showing keyboard shortcuts."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close"),
        Binding("?", "dismiss", "Close"),
    ]

    CSS = dialog_css("HelpScreen", width=60)

    def compose(self) -> ComposeResult:
        with Container(id="dialog"):
            yield Label("plantnav - Keyboard Shortcuts", id="title")

            yield Label("Navigation", classes="section")
            yield Label("  j / ↓      Move down")
            yield Label("  k / ↑      Move up")
            yield Label("  g / G      First / last plant")
            yield Label("  Enter      Plant details")

            yield Label("Filtering", classes="section")
            yield Label("  z          Filter by grow zone number")
            yield Label("  Escape     Show all grow zones")

            yield Label("View", classes="section")
            yield Label("  F          Toggle fullscreen")
            yield Label("  ?          This help")
            yield Label("  q          Quit")

            yield Label("Press Escape to close", id="hint")


class PlantDetailScreen(ModalScreen[None]):
    """Details of a single plant."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close"),
    ]

    CSS = dialog_css("PlantDetailScreen", width="60%")

    def __init__(self, plant: Plant) -> None:
        super().__init__()
        self.plant = plant

    def compose(self) -> ComposeResult:
        plant = self.plant
        with Container(id="dialog"):
            yield Label(plant.name, id="title")
            yield Label(f"Id: {plant.plant_id}")
            yield Label(f"Grow zone: {plant.grow_zone_number}")
            yield Label(f"Water every {plant.watering_interval} days")
            if plant.image_url:
                yield Label(f"Image: {plant.image_url}")
            yield Label("Description", classes="section")
            yield Label(plant.description or "-")
            yield Label("Press Escape to close", id="hint")
