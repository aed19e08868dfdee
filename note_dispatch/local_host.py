"""
Local vault host — runs the plugin outside a note-taking app.

Files come from a vault directory on disk, settings are kept in a JSON file,
the namespace prompt is asked on the terminal and notifications are printed.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from note_dispatch import config
from note_dispatch.errors import ReadError
from note_dispatch.host import MenuCallback, MenuContribution, VaultFile
from note_dispatch.services.namespace_prompt import NamespacePrompt
from note_dispatch.services.settings_panel import SettingsPanel

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.LOG_FILE),
        ],
    )


@dataclass
class MenuItem:
    title: str
    icon: str
    callback: MenuCallback


class LocalMenu:
    """Collects the actions contributed for one file."""

    def __init__(self):
        self.items: list[MenuItem] = []

    def add_item(self, title: str, icon: str, callback: MenuCallback) -> None:
        self.items.append(MenuItem(title, icon, callback))


class LocalVaultHost:
    """Host backed by the filesystem and the terminal."""

    def __init__(
        self,
        vault_path: Path | None = None,
        settings_file: Path | None = None,
        input_func: Callable[[str], str] | None = None,
        output_func: Callable[[str], None] | None = None,
    ):
        self.vault_path = Path(vault_path or config.VAULT_PATH).resolve()
        self.settings_file = settings_file or config.settings_path(self.vault_path)
        self._input = input_func or input
        self._output = output_func or print
        self._menu_handlers: list[MenuContribution] = []
        self._prompt_tasks: set[asyncio.Task] = set()
        self.settings_panel: SettingsPanel | None = None

    # ── Files ─────────────────────────────────────────────────────────

    def file_for(self, path: Path) -> VaultFile:
        """Vault handle for *path* (absolute, or relative to the working dir)."""
        absolute = Path(path).resolve()
        try:
            relative = absolute.relative_to(self.vault_path)
        except ValueError:
            raise ValueError(f"{path} is not inside the vault {self.vault_path}") from None
        return VaultFile.from_path(relative.as_posix())

    def _disk_path(self, file: VaultFile) -> Path:
        return self.vault_path / file.path

    async def read_text(self, file: VaultFile) -> str:
        try:
            return await asyncio.to_thread(
                self._disk_path(file).read_text, encoding="utf-8"
            )
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(file.path, str(exc)) from exc

    async def read_binary(self, file: VaultFile) -> bytes:
        try:
            return await asyncio.to_thread(self._disk_path(file).read_bytes)
        except OSError as exc:
            raise ReadError(file.path, str(exc)) from exc

    # ── Settings persistence ──────────────────────────────────────────

    def load_persisted(self) -> dict | None:
        path = Path(self.settings_file)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Unreadable settings file %s, using defaults.", path, exc_info=True)
            return None

    def save_persisted(self, data: dict) -> None:
        path = Path(self.settings_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    # ── UI surface ────────────────────────────────────────────────────

    def notify(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self._output(message)

    def open_prompt(self, prompt: NamespacePrompt) -> None:
        task = asyncio.get_running_loop().create_task(self._run_prompt(prompt))
        self._prompt_tasks.add(task)
        task.add_done_callback(self._prompt_tasks.discard)

    async def _run_prompt(self, prompt: NamespacePrompt) -> None:
        question = (
            f"{prompt.title}\n{prompt.description}\n"
            f"Namespace [{prompt.namespace}]: "
        )
        try:
            answer = await asyncio.to_thread(self._input, question)
        except EOFError:
            prompt.dismiss()
            return
        # An empty answer keeps the suggested namespace.
        if answer.strip():
            prompt.set_value(answer.strip())
        prompt.submit()

    def register_menu_contribution(self, handler: MenuContribution) -> None:
        self._menu_handlers.append(handler)

    def register_settings_panel(self, panel: SettingsPanel) -> None:
        self.settings_panel = panel

    def menu_for(self, file: VaultFile) -> LocalMenu:
        """Build the context menu the host would show for *file*."""
        menu = LocalMenu()
        for handler in self._menu_handlers:
            handler(menu, file)
        return menu
