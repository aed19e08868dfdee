"""Tests for plugin activation and menu contributions."""

from unittest.mock import AsyncMock

import pytest

from note_dispatch.host import VaultFile
from note_dispatch.plugin import (
    DOCUMENT_ACTION_TITLE,
    NOTE_ACTION_TITLE,
    WebhookDispatchPlugin,
)
from note_dispatch.services.settings_panel import SettingsPanel
from tests.conftest import FakeHost, FakeMenu


@pytest.fixture
def plugin():
    host = FakeHost(
        persisted={
            "credentials": {"username": "alice", "password": "s3cret"},
            "notesWebhookUrl": "https://hooks.example.com/notes",
        }
    )
    plugin = WebhookDispatchPlugin(host)
    plugin.on_activate()
    return plugin


def contributed(plugin, path):
    menu = FakeMenu()
    for handler in plugin.host.menu_handlers:
        handler(menu, VaultFile.from_path(path))
    return menu.items


class TestActivation:
    def test_loads_settings_into_dispatcher(self, plugin):
        assert plugin.dispatcher.settings.credentials.username == "alice"
        assert plugin.dispatcher.settings.notes_webhook_url == "https://hooks.example.com/notes"
        assert plugin.dispatcher.settings.embeddings_webhook_url == ""

    def test_registers_panel_and_menu_handler(self, plugin):
        assert plugin.host.panels == [plugin.panel]
        assert isinstance(plugin.panel, SettingsPanel)
        assert plugin.host.menu_handlers == [plugin.on_file_menu]

    def test_panel_edits_reach_dispatcher(self, plugin):
        plugin.panel.on_change("embeddingsWebhookUrl", "https://hooks.example.com/emb")
        assert plugin.dispatcher.settings.embeddings_webhook_url == "https://hooks.example.com/emb"
        assert plugin.host.persisted["embeddingsWebhookUrl"] == "https://hooks.example.com/emb"

    def test_deactivate_is_a_no_op(self, plugin):
        plugin.on_deactivate()
        assert plugin.host.notices == []


class TestFileMenu:
    def test_markdown_gets_note_action(self, plugin):
        items = contributed(plugin, "vault/nlp/intro.md")
        assert [(title, icon) for title, icon, _ in items] == [(NOTE_ACTION_TITLE, "sparkles")]

    def test_pdf_gets_vectorize_action(self, plugin):
        items = contributed(plugin, "vault/nlp/paper.pdf")
        assert [(title, icon) for title, icon, _ in items] == [
            (DOCUMENT_ACTION_TITLE, "database-zap")
        ]

    @pytest.mark.parametrize("path", ["vault/a.txt", "vault/b.png", "vault/README", "vault/c.MD"])
    def test_other_files_get_nothing(self, plugin, path):
        assert contributed(plugin, path) == []

    @pytest.mark.asyncio
    async def test_actions_call_the_matching_send(self, plugin):
        plugin.dispatcher.send_note = AsyncMock(return_value="note")
        plugin.dispatcher.send_document = AsyncMock(return_value="doc")

        (_, _, note_cb), = contributed(plugin, "vault/nlp/intro.md")
        (_, _, pdf_cb), = contributed(plugin, "vault/nlp/paper.pdf")

        assert await note_cb() == "note"
        assert await pdf_cb() == "doc"
        plugin.dispatcher.send_note.assert_awaited_once_with(
            VaultFile.from_path("vault/nlp/intro.md")
        )
        plugin.dispatcher.send_document.assert_awaited_once_with(
            VaultFile.from_path("vault/nlp/paper.pdf")
        )
