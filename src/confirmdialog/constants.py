"""Demo application constants."""

APP_TITLE = "confirmdialog"

DEFAULT_ITEMS: list[str] = [
    "invoice-2024-001.pdf",
    "invoice-2024-002.pdf",
    "quarterly-report.xlsx",
    "team-photo.png",
    "notes.md",
]

TABLE_COLUMNS = ("#", "Item")
