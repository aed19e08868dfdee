"""
Host contracts — everything the plugin borrows from the application it runs in.

The host owns file storage, menu rendering, settings persistence, modal
rendering and notifications.  The plugin only talks to it through the
``Host`` protocol below, so the dispatch, prompt and settings logic can be
exercised with a fake host in tests and with ``LocalVaultHost`` from the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol

if TYPE_CHECKING:
    from note_dispatch.services.namespace_prompt import NamespacePrompt
    from note_dispatch.services.settings_panel import SettingsPanel


@dataclass(frozen=True)
class VaultFile:
    """Read-only handle to a stored note or document.

    ``path`` is vault-relative and ``/``-separated, e.g.
    ``"vault/nlp/classA/intro.md"``.
    """
    path: str
    name: str
    basename: str
    extension: str

    @classmethod
    def from_path(cls, path: str) -> "VaultFile":
        name = path.rsplit("/", 1)[-1]
        if "." in name.lstrip("."):
            basename, extension = name.rsplit(".", 1)
        else:
            basename, extension = name, ""
        return cls(path=path, name=name, basename=basename, extension=extension)


MenuCallback = Callable[[], Awaitable[Any]]


class Menu(Protocol):
    """Mutable context-menu builder handed out by the host."""

    def add_item(self, title: str, icon: str, callback: MenuCallback) -> None:
        ...


MenuContribution = Callable[[Menu, VaultFile], None]


class Host(Protocol):
    """What the plugin needs from the surrounding application."""

    async def read_text(self, file: VaultFile) -> str:
        """Full text of *file*; raises ``ReadError`` if unreadable."""

    async def read_binary(self, file: VaultFile) -> bytes:
        """Raw bytes of *file*; raises ``ReadError`` if unreadable."""

    def load_persisted(self) -> dict | None:
        ...

    def save_persisted(self, data: dict) -> None:
        ...

    def notify(self, message: str) -> None:
        """Transient, fire-and-forget user notification."""

    def open_prompt(self, prompt: "NamespacePrompt") -> None:
        """Show *prompt* modally without blocking the caller."""

    def register_menu_contribution(self, handler: MenuContribution) -> None:
        ...

    def register_settings_panel(self, panel: "SettingsPanel") -> None:
        ...
