"""Textual app that shows the plant list of the selected grow zone."""

import logging

from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Input, Static

from plantnav.core.controller import PlantListController
from plantnav.core.errors import InvalidFilterError
from plantnav.core.filter import GrowZone
from plantnav.core.state import Disposer
from plantnav.repository import Plant, PlantRepository
from plantnav.ui import APP_CSS, HelpScreen, PlantDetailScreen, ZoneInput

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_WIDTH = 60


class PlantNavApp(App[None]):
    TITLE = "plantnav"

    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False),
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
        Binding("z", "start_filter", "Zone"),
        Binding("escape", "clear_filter", "All Zones", show=False),
        Binding("F", "toggle_fullscreen", "Fullscreen"),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "cursor_top", "First", show=False),
        Binding("G", "cursor_bottom", "Last", show=False),
    ]

    def __init__(
        self,
        repository: PlantRepository,
        initial_zone: GrowZone | None = None,
        textual_theme: str = "textual-dark",
        fullscreen: bool = False,
        refresh_on_repeat: bool = True,
    ) -> None:
        super().__init__()
        self.theme = textual_theme
        self.repository = repository
        self.initial_zone = initial_zone
        self.refresh_on_repeat = refresh_on_repeat
        self._fullscreen = fullscreen
        self.controller: PlantListController | None = None
        self.plants: list[Plant] = []
        self._disposers: list[Disposer] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="plant-table", cursor_type="row")
        yield ZoneInput(placeholder="Grow zone number (empty for all)", id="filter")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("Name", "Zone", "Water", "Description")
        self.call_after_refresh(table.focus)
        self.set_class(self._fullscreen, "fullscreen")

        # Loading starts as soon as the controller exists
        self.controller = PlantListController(
            self.repository, refresh_on_repeat=self.refresh_on_repeat
        )
        self._disposers = [
            self.controller.results.subscribe(self._show_plants),
            self.controller.loading.subscribe(lambda _: self._update_status()),
            self.controller.message.subscribe(self._show_message),
        ]
        if self.initial_zone is not None:
            self.controller.set_filter(self.initial_zone)

    def on_unmount(self) -> None:
        for dispose in self._disposers:
            dispose()
        self._disposers.clear()
        if self.controller is not None:
            self.controller.close()

    def _show_plants(self, plants: list[Plant]) -> None:
        """Replace the table rows with the latest plant list."""
        self.plants = plants
        table = self.query_one(DataTable)
        table.clear()
        for plant in plants:
            table.add_row(*self._build_row_data(plant), key=plant.plant_id)
        self._update_status()

    def _build_row_data(self, plant: Plant) -> list[str | Text]:
        description = plant.description.replace("\n", " ")[:DESCRIPTION_PREVIEW_WIDTH]
        if len(plant.description) > DESCRIPTION_PREVIEW_WIDTH:
            description += "..."
        return [
            Text(plant.name, style=Style(bold=True)),
            str(plant.grow_zone_number),
            f"{plant.watering_interval}d",
            description,
        ]

    def _show_message(self, message: str | None) -> None:
        """Show a load failure once, then acknowledge it."""
        if message is None or self.controller is None:
            return
        logger.debug("Showing message: %s", message)
        self.notify(message, title="Loading failed", severity="error")
        self.controller.acknowledge_message()

    def _update_status(self) -> None:
        status = self.query_one("#status-bar", Static)
        if self.controller is None:
            status.update("Starting...")
            return

        zone = self.controller.filter
        parts = [f"Zone: {zone.number}" if self.controller.is_filtered() else "Zone: all"]

        loading = self.controller.loading.value
        if loading:
            parts.append("Loading...")
        status.set_class(loading, "loading")

        parts.append(f"Plants: {len(self.plants)}")
        status.update(" | ".join(parts))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Apply the typed grow zone; an empty value shows every zone."""
        if event.input.id != "filter" or self.controller is None:
            return

        text = event.value.strip()
        event.input.remove_class("visible")
        event.input.value = ""
        self.query_one(DataTable).focus()

        if not text:
            self.controller.clear_filter()
            return

        try:
            self.controller.set_filter(int(text))
        except (ValueError, InvalidFilterError):
            self.notify(f"Not a grow zone: {text}", severity="warning")
            return

        self.query_one(ZoneInput).remember(text)
        self._update_status()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        plant_id = event.row_key.value
        for plant in self.plants:
            if plant.plant_id == plant_id:
                self.push_screen(PlantDetailScreen(plant))
                return

    def action_start_filter(self) -> None:
        """Show the zone input and focus it."""
        zone_input = self.query_one(ZoneInput)
        zone_input.add_class("visible")
        if self.controller is not None and self.controller.is_filtered():
            zone_input.value = str(self.controller.filter.number)
        zone_input.focus()

    def action_clear_filter(self) -> None:
        """Hide the zone input and show every zone."""
        zone_input = self.query_one(ZoneInput)
        if zone_input.has_class("visible"):
            zone_input.remove_class("visible")
            zone_input.value = ""

        if self.controller is not None and self.controller.is_filtered():
            self.controller.clear_filter()
            self.notify("Showing all grow zones")
        self.query_one(DataTable).focus()

    def action_toggle_fullscreen(self) -> None:
        """Hide or show header, footer and status bar."""
        self._fullscreen = not self._fullscreen
        self.set_class(self._fullscreen, "fullscreen")

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_cursor_down(self) -> None:
        self.query_one(DataTable).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(DataTable).action_cursor_up()

    def action_cursor_top(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count:
            table.move_cursor(row=0)

    def action_cursor_bottom(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count:
            table.move_cursor(row=table.row_count - 1)
