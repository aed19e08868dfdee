"""Test fixtures and a scriptable in-memory host."""

import asyncio
import copy
from unittest.mock import Mock

import pytest

from note_dispatch.errors import ReadError
from note_dispatch.host import VaultFile
from note_dispatch.services.settings_store import Credentials, Settings

# Submit the prompt without editing the suggested namespace.
KEEP = object()


class FakeMenu:
    def __init__(self):
        self.items = []

    def add_item(self, title, icon, callback):
        self.items.append((title, icon, callback))


class FakeHost:
    """
    In-memory host.  ``prompt_answer`` decides what the "user" does with each
    prompt: a string is typed and submitted, ``KEEP`` submits the suggestion,
    ``None`` dismisses.  ``before_answer`` runs while the prompt is open.
    """

    def __init__(self, files=None, persisted=None):
        self.files = dict(files or {})
        self.persisted = persisted
        self.saved = []
        self.notices = []
        self.prompts = []
        self.prompt_answer = KEEP
        self.before_answer = None
        self.reads = []
        self.menu_handlers = []
        self.panels = []

    async def read_text(self, file):
        self.reads.append(("text", file.path))
        if file.path not in self.files:
            raise ReadError(file.path, "no such file")
        value = self.files[file.path]
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def read_binary(self, file):
        self.reads.append(("binary", file.path))
        if file.path not in self.files:
            raise ReadError(file.path, "no such file")
        value = self.files[file.path]
        return value.encode("utf-8") if isinstance(value, str) else value

    def load_persisted(self):
        return copy.deepcopy(self.persisted)

    def save_persisted(self, data):
        self.persisted = copy.deepcopy(data)
        self.saved.append(copy.deepcopy(data))

    def notify(self, message):
        self.notices.append(message)

    def open_prompt(self, prompt):
        self.prompts.append(prompt)
        asyncio.get_running_loop().call_soon(self._answer, prompt)

    def _answer(self, prompt):
        if self.before_answer is not None:
            self.before_answer()
        if self.prompt_answer is None:
            prompt.dismiss()
            return
        if self.prompt_answer is not KEEP:
            prompt.set_value(self.prompt_answer)
        prompt.submit()

    def register_menu_contribution(self, handler):
        self.menu_handlers.append(handler)

    def register_settings_panel(self, panel):
        self.panels.append(panel)


@pytest.fixture
def note_file():
    return VaultFile.from_path("vault/nlp/classA/intro.md")


@pytest.fixture
def pdf_file():
    return VaultFile.from_path("vault/nlp/classA/paper.pdf")


@pytest.fixture
def fake_host(note_file, pdf_file):
    return FakeHost(
        files={
            note_file.path: "# Intro\n\nTokenizers split text.",
            pdf_file.path: b"%PDF-1.4\n" + b"\x00\x01\x02" * 100,
        }
    )


@pytest.fixture
def settings():
    return Settings(
        credentials=Credentials(username="alice", password="s3cret"),
        notes_webhook_url="https://hooks.example.com/notes",
        embeddings_webhook_url="https://hooks.example.com/embeddings",
    )


@pytest.fixture
def ok_response():
    return Mock(status_code=200)
