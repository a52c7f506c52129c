"""Item table widget used by the demo app."""

from textual.binding import Binding
from textual.widgets import DataTable

from confirmdialog.constants import TABLE_COLUMNS


class ItemTable(DataTable):
    """Scrollable table of item names with vim-style navigation.

    Rows are keyed by the item name, so repopulating keeps keys stable.
    """

    BINDINGS = [
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True

    def load(self, items: list[str]) -> None:
        """Replace table contents with a new list of items."""
        if not self.columns:
            self.add_columns(*TABLE_COLUMNS)
        self.clear()
        for i, item in enumerate(items, start=1):
            self.add_row(str(i), item, key=item)

    def selected_item(self) -> str | None:
        """Return the item on the highlighted row, or None when empty."""
        if self.row_count == 0:
            return None
        cell = self.get_cell_at(self.cursor_coordinate._replace(column=1))
        return str(cell)
