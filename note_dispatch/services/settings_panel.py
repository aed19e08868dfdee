"""Settings Panel — four text fields bound straight to the settings store."""

import logging
from dataclasses import dataclass

from note_dispatch.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingField:
    key: str
    label: str
    description: str
    placeholder: str
    masked: bool = False


PANEL_TITLE = "Webhook credentials"

FIELDS = (
    SettingField("username", "Username", "Username for webhook authentication", "username"),
    SettingField(
        "password", "Password", "Password for webhook authentication", "password", masked=True
    ),
    SettingField("notesWebhookUrl", "Notes webhook URL", "Webhook that receives notes", "url"),
    SettingField(
        "embeddingsWebhookUrl",
        "Embeddings webhook URL",
        "Webhook that receives PDFs for vectorization",
        "url",
    ),
)


class SettingsPanel:
    """Every edit is written through and persisted at once."""

    def __init__(self, store: SettingsStore):
        self.store = store
        self.title = PANEL_TITLE

    def fields(self) -> list[tuple[SettingField, str]]:
        return [(f, self.store.get(f.key)) for f in FIELDS]

    def on_change(self, key: str, value: str) -> None:
        self.store.update(key, value)
        logger.debug("Setting '%s' updated.", key)

    def render(self) -> list[str]:
        lines = [self.title]
        for f, value in self.fields():
            shown = "*" * len(value) if f.masked else value
            lines.append(f"  {f.label} [{f.key}]: {shown or '(' + f.placeholder + ')'}")
        return lines
