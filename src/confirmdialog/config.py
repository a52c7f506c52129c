"""Settings file loading, validation, and persistence.

Schema on disk (~/.config/confirmdialog/config.json):

    {
        "ajax": true,
        "layout_file": "~/dialogs/layout.txt",
        "template_file": "~/dialogs/confirmer.txt"
    }

Every key is optional.  Keys prefixed with "_" are reserved (e.g. "_comment")
and are stripped on load.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from confirmdialog.errors import ConfigError

SETTINGS_PATH = Path("~/.config/confirmdialog/config.json").expanduser()


class DialogSettings(BaseModel):
    """Defaults applied to a dialog controller at construction."""

    ajax: bool = True
    layout_file: Path | None = None
    template_file: Path | None = None

    @field_validator("layout_file", "template_file")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


def load_settings(path: Path | None = None) -> DialogSettings:
    """Load and validate the settings file.

    Returns default settings if the file does not exist or is empty.  Raises
    ConfigError if the file exists but is malformed.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return DialogSettings()

    text = path.read_text()
    if not text.strip():
        return DialogSettings()

    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path.name} must be a JSON object at the top level")

    # Strip reserved/comment keys.
    data = {k: v for k, v in raw.items() if not k.startswith("_")}

    try:
        return DialogSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path.name}: {exc}") from exc


def save_settings(settings: DialogSettings, path: Path | None = None) -> None:
    """Persist settings to disk, creating directories as needed."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(mode="json"), indent=2))
