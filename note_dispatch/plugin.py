"""
Plugin entry point — wires the services into the host.

On activation:
  1. load settings from host persistence
  2. register the settings panel
  3. contribute file-menu actions: Markdown → notes webhook,
     PDF → embeddings webhook
"""

import logging

from note_dispatch.host import Host, Menu, VaultFile
from note_dispatch.services.dispatcher import Dispatcher
from note_dispatch.services.settings_panel import SettingsPanel
from note_dispatch.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

NOTE_ACTION_TITLE = "Generate enhanced note"
NOTE_ACTION_ICON = "sparkles"
DOCUMENT_ACTION_TITLE = "Vectorize"
DOCUMENT_ACTION_ICON = "database-zap"


class WebhookDispatchPlugin:
    """Lifecycle object the host creates, activates and tears down."""

    def __init__(self, host: Host):
        self.host = host
        self.store = SettingsStore(host)
        self.dispatcher = Dispatcher(host, self.store.settings)
        self.panel = SettingsPanel(self.store)

    def on_activate(self) -> None:
        self.store.load()
        self.host.register_settings_panel(self.panel)
        self.host.register_menu_contribution(self.on_file_menu)
        logger.info("Webhook dispatch plugin activated.")

    def on_file_menu(self, menu: Menu, file: VaultFile) -> None:
        if file.extension == "md":
            menu.add_item(
                NOTE_ACTION_TITLE,
                NOTE_ACTION_ICON,
                lambda: self.dispatcher.send_note(file),
            )
        elif file.extension == "pdf":
            menu.add_item(
                DOCUMENT_ACTION_TITLE,
                DOCUMENT_ACTION_ICON,
                lambda: self.dispatcher.send_document(file),
            )

    def on_deactivate(self) -> None:
        # Registered handlers are dropped by the host.
        pass
