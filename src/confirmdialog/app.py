"""Demo host application for the confirmation dialog."""

from collections.abc import Mapping
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from confirmdialog.config import DialogSettings
from confirmdialog.confirmer import ConfirmerInstance
from confirmdialog.constants import APP_TITLE, DEFAULT_ITEMS
from confirmdialog.errors import ConfirmationDialogError
from confirmdialog.widgets.confirmation_dialog import ConfirmationDialog
from confirmdialog.widgets.item_table import ItemTable


def _delete_question(confirmer: ConfirmerInstance, params: Mapping[str, Any]) -> str:
    return f"Really delete {params['item']}?"


def _clear_question(confirmer: ConfirmerInstance, params: Mapping[str, Any]) -> str:
    count = params.get("count", 0)
    noun = "item" if count == 1 else "items"
    return f"Remove all {count} {noun}? This cannot be undone."


class DemoApp(App):
    """A list of items guarded by two confirmers: deleteItem and clearAll."""

    TITLE = APP_TITLE

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("d", "delete_item", "Delete"),
        Binding("c", "clear_all", "Clear all"),
        Binding("a", "toggle_ajax", "Inline/modal"),
    ]

    def __init__(
        self,
        items: list[str] | None = None,
        settings: DialogSettings | None = None,
    ) -> None:
        super().__init__()
        self._items: list[str] = list(items if items is not None else DEFAULT_ITEMS)
        self._dialog_settings = settings or DialogSettings()

    def compose(self) -> ComposeResult:
        yield Header()
        yield ItemTable(id="items")
        yield ConfirmationDialog(self._dialog_settings, id="dialog")
        yield Footer()

    def on_mount(self) -> None:
        self._get_dialog().define_confirmer(
            "deleteItem", self._delete_item, _delete_question, "Delete item"
        ).define_confirmer("clearAll", self._clear_all, _clear_question, "Clear list")
        self._refresh_table()
        self._get_table().focus()
        self._update_subtitle()

    @property
    def items(self) -> list[str]:
        return list(self._items)

    def _get_dialog(self) -> ConfirmationDialog:
        return self.query_one("#dialog", ConfirmationDialog)

    def _get_table(self) -> ItemTable:
        return self.query_one("#items", ItemTable)

    def _refresh_table(self) -> None:
        self._get_table().load(self._items)

    def _update_subtitle(self) -> None:
        mode = "inline" if self._get_dialog().controller.ajax else "modal"
        self.sub_title = f"{len(self._items)} items · {mode} prompts"

    def _signal(self, signal_id: str, **params: Any) -> None:
        try:
            self._get_dialog().signal(signal_id, **params)
        except ConfirmationDialogError as exc:
            self.notify(f"Cannot confirm: {exc}", severity="error", timeout=8)

    # Confirmer handlers

    def _delete_item(self, params: dict[str, Any]) -> None:
        item = params["item"]
        if item in self._items:
            self._items.remove(item)
        self._refresh_table()
        self._update_subtitle()
        self.notify(f"Deleted {item}", timeout=2)

    def _clear_all(self, params: dict[str, Any]) -> None:
        self._items.clear()
        self._refresh_table()
        self._update_subtitle()
        self.notify("Cleared all items", timeout=2)

    # Actions

    def action_delete_item(self) -> None:
        item = self._get_table().selected_item()
        if item is None:
            self.notify("Nothing to delete", timeout=2)
            return
        self._signal("confirmDeleteItem", item=item)

    def action_clear_all(self) -> None:
        if not self._items:
            self.notify("Nothing to clear", timeout=2)
            return
        self._signal("confirmClearAll", count=len(self._items))

    def action_toggle_ajax(self) -> None:
        dialog = self._get_dialog()
        if dialog.controller.ajax:
            dialog.disable_ajax()
        else:
            dialog.enable_ajax()
        self._update_subtitle()

    def on_confirmation_dialog_confirmed(self, event: ConfirmationDialog.Confirmed) -> None:
        event.stop()
        self._get_table().focus()

    def on_confirmation_dialog_cancelled(self, event: ConfirmationDialog.Cancelled) -> None:
        event.stop()
        self._get_table().focus()


def main() -> None:
    DemoApp().run()


if __name__ == "__main__":
    main()
