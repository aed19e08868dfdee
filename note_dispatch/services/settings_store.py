"""
Settings Store — the plugin's four configuration values (webhook
credentials and the two webhook URLs), persisted through the host.

Persisted layout (camelCase, as the host stores it):

    {"credentials": {"username": "", "password": ""},
     "notesWebhookUrl": "", "embeddingsWebhookUrl": ""}

No validation happens here: a bad URL or empty credentials only show up
as a failed request at send time.
"""

import copy
import logging
from dataclasses import dataclass, field

from note_dispatch.host import Host

logger = logging.getLogger(__name__)


@dataclass
class Credentials:
    username: str = ""
    password: str = ""


@dataclass
class Settings:
    """Everything the dispatcher needs to reach the webhooks."""
    credentials: Credentials = field(default_factory=Credentials)
    notes_webhook_url: str = ""
    embeddings_webhook_url: str = ""

    def to_dict(self) -> dict:
        return {
            "credentials": {
                "username": self.credentials.username,
                "password": self.credentials.password,
            },
            "notesWebhookUrl": self.notes_webhook_url,
            "embeddingsWebhookUrl": self.embeddings_webhook_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        creds = data.get("credentials") or {}
        return cls(
            credentials=Credentials(
                username=str(creds.get("username", "")),
                password=str(creds.get("password", "")),
            ),
            notes_webhook_url=str(data.get("notesWebhookUrl", "")),
            embeddings_webhook_url=str(data.get("embeddingsWebhookUrl", "")),
        )


DEFAULT_SETTINGS: dict = Settings().to_dict()


def merge_settings(defaults: dict, persisted: dict | None) -> dict:
    """
    Lay *persisted* over *defaults*.  Persisted values win per top-level key,
    and per key inside ``credentials``.  Keys the defaults don't know about
    are dropped.
    """
    merged = copy.deepcopy(defaults)
    if not persisted:
        return merged

    for key, value in persisted.items():
        if key not in merged:
            logger.debug("Ignoring unknown persisted setting '%s'", key)
            continue
        if isinstance(merged[key], dict):
            if not isinstance(value, dict):
                logger.warning("Persisted '%s' is not an object, keeping defaults.", key)
                continue
            for sub_key, sub_value in value.items():
                if sub_key in merged[key]:
                    merged[key][sub_key] = sub_value
                else:
                    logger.debug("Ignoring unknown persisted setting '%s.%s'", key, sub_key)
        else:
            merged[key] = value
    return merged


# Panel field key → how to write it onto a Settings instance
_FIELD_SETTERS = {
    "username": lambda s, v: setattr(s.credentials, "username", v),
    "password": lambda s, v: setattr(s.credentials, "password", v),
    "notesWebhookUrl": lambda s, v: setattr(s, "notes_webhook_url", v),
    "embeddingsWebhookUrl": lambda s, v: setattr(s, "embeddings_webhook_url", v),
}

_FIELD_GETTERS = {
    "username": lambda s: s.credentials.username,
    "password": lambda s: s.credentials.password,
    "notesWebhookUrl": lambda s: s.notes_webhook_url,
    "embeddingsWebhookUrl": lambda s: s.embeddings_webhook_url,
}

FIELD_KEYS = tuple(_FIELD_SETTERS)


class SettingsStore:
    """Owns the single ``Settings`` instance and its persistence."""

    def __init__(self, host: Host):
        self.host = host
        self.settings = Settings()

    def load(self) -> Settings:
        """Read persisted settings and merge them over the defaults.  Never fails."""
        persisted = self.host.load_persisted()
        if persisted is not None and not isinstance(persisted, dict):
            logger.warning(
                "Persisted settings are %s, not an object, using defaults.",
                type(persisted).__name__,
            )
            persisted = None

        merged = Settings.from_dict(merge_settings(DEFAULT_SETTINGS, persisted))
        # Mutate in place: the dispatcher and panel hold a reference.
        self.settings.credentials = merged.credentials
        self.settings.notes_webhook_url = merged.notes_webhook_url
        self.settings.embeddings_webhook_url = merged.embeddings_webhook_url
        logger.debug("Settings loaded (%s persisted).", "none" if persisted is None else "some")
        return self.settings

    def save(self) -> None:
        """Overwrite the persisted settings with the current state."""
        self.host.save_persisted(self.settings.to_dict())

    def get(self, key: str) -> str:
        if key not in _FIELD_GETTERS:
            raise KeyError(key)
        return _FIELD_GETTERS[key](self.settings)

    def update(self, key: str, value: str) -> None:
        """Set one field by its panel key and persist immediately."""
        if key not in _FIELD_SETTERS:
            raise KeyError(key)
        _FIELD_SETTERS[key](self.settings, value)
        self.save()
