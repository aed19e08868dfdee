"""
Process configuration for the local note-dispatch host.

Only process-level knobs live here (vault location, settings file, logging).
Values are read from environment variables (or a .env file) with sensible
defaults.  Webhook URLs and credentials are plugin settings, persisted by the
host through the settings store, not environment config.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Vault ─────────────────────────────────────────────────────────────
# Root of the note vault on disk; file paths are reported relative to it
VAULT_PATH = Path(os.getenv("VAULT_PATH", "."))

# ── Plugin settings persistence ───────────────────────────────────────
# JSON file holding credentials and webhook URLs.  Empty means
# <vault>/.note-dispatch/data.json
SETTINGS_FILE = os.getenv("SETTINGS_FILE", "")
SETTINGS_DIRNAME = ".note-dispatch"
SETTINGS_FILENAME = "data.json"

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "note_dispatch.log")


def settings_path(vault_path: Path) -> Path:
    """Where the local host persists plugin settings for *vault_path*."""
    if SETTINGS_FILE:
        return Path(SETTINGS_FILE)
    return vault_path / SETTINGS_DIRNAME / SETTINGS_FILENAME
