"""
Dispatcher — forwards a vault file to one of the two webhooks.

  - Markdown notes go to the notes webhook as a JSON document
  - PDFs go to the embeddings webhook as a multipart upload

Each send reads the file, asks the user to confirm the namespace, makes a
single authenticated POST and reports the outcome as a host notification.
Nothing is retried or queued, and no failure propagates to the caller.
"""

import asyncio
import base64
import enum
import json
import logging

import requests

from note_dispatch.errors import HttpStatusError, NetworkError, ReadError
from note_dispatch.host import Host, VaultFile
from note_dispatch.services.namespace_prompt import ask_namespace
from note_dispatch.services.settings_store import Credentials, Settings

logger = logging.getLogger(__name__)


class DispatchOutcome(enum.Enum):
    SENT = "sent"
    CANCELLED = "cancelled"
    READ_FAILED = "read_failed"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


NOTE_PROMPT_TITLE = "Configure search namespace"
NOTE_PROMPT_DESCRIPTION = "Namespace where information related to this note will be searched"
DOCUMENT_PROMPT_TITLE = "Configure embeddings namespace"
DOCUMENT_PROMPT_DESCRIPTION = "Namespace where the PDF will be stored"

NOTE_MESSAGES = {
    DispatchOutcome.SENT: "File sent successfully.",
    DispatchOutcome.HTTP_ERROR: "Error sending the file.",
    DispatchOutcome.NETWORK_ERROR: "Network error while sending the file.",
}
DOCUMENT_MESSAGES = {
    DispatchOutcome.SENT: "PDF sent for vectorization.",
    DispatchOutcome.HTTP_ERROR: "Error sending the PDF.",
    DispatchOutcome.NETWORK_ERROR: "Network error while sending the PDF.",
}

PDF_MIME = "application/pdf"


# ── Path and header helpers ───────────────────────────────────────────

def derive_dir_path(file_path: str) -> str:
    """
    Drop the file name and the leading segment (the vault/repo folder).

    ``"vault/nlp/classA/notes.md"`` → ``"nlp/classA"``; a file directly
    under the leading folder gives ``""``.
    """
    if "/" not in file_path:
        return ""
    dir_path = file_path.rsplit("/", 1)[0]
    if "/" not in dir_path:
        return ""
    return dir_path.split("/", 1)[1]


def default_namespace(dir_path: str) -> str:
    """First segment of *dir_path*, or all of it when there is no ``/``."""
    return dir_path.split("/", 1)[0]


def basic_auth_header(credentials: Credentials) -> str:
    token = f"{credentials.username}:{credentials.password}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def build_note_payload(file: VaultFile, content: str, namespace: str) -> dict:
    return {
        "fileName": file.name,
        "filePath": file.path,
        "dirPath": derive_dir_path(file.path),
        "content": content,
        "title": file.basename,
        "baseDir": namespace,
    }


def post_webhook(url: str, **kwargs) -> requests.Response:
    """
    One POST, no retry.  Transport failures become ``NetworkError`` and any
    non-2xx answer becomes ``HttpStatusError``.
    """
    try:
        resp = requests.post(url, **kwargs)
    except requests.RequestException as exc:
        raise NetworkError(url, str(exc)) from exc
    if not 200 <= resp.status_code < 300:
        raise HttpStatusError(url, resp.status_code)
    return resp


# ── Dispatcher ────────────────────────────────────────────────────────

class Dispatcher:
    """Sends notes and documents to the configured webhooks."""

    def __init__(self, host: Host, settings: Settings):
        self.host = host
        self.settings = settings

    async def send_note(self, file: VaultFile) -> DispatchOutcome:
        """Send a Markdown note's text to the notes webhook as JSON."""
        try:
            content = await self.host.read_text(file)
        except ReadError:
            return self._read_failed(file)

        namespace = await ask_namespace(
            self.host,
            default_namespace(derive_dir_path(file.path)),
            NOTE_PROMPT_TITLE,
            NOTE_PROMPT_DESCRIPTION,
        )
        if namespace is None:
            return DispatchOutcome.CANCELLED

        payload = build_note_payload(file, content, namespace)
        return await self._deliver(
            NOTE_MESSAGES,
            self.settings.notes_webhook_url,
            headers={
                "Content-Type": "application/json",
                "Authorization": basic_auth_header(self.settings.credentials),
            },
            data=json.dumps(payload),
        )

    async def send_document(self, file: VaultFile) -> DispatchOutcome:
        """Upload a PDF's bytes to the embeddings webhook as multipart form data."""
        try:
            await self.host.read_binary(file)
        except ReadError:
            return self._read_failed(file)

        namespace = await ask_namespace(
            self.host,
            default_namespace(derive_dir_path(file.path)),
            DOCUMENT_PROMPT_TITLE,
            DOCUMENT_PROMPT_DESCRIPTION,
        )
        if namespace is None:
            return DispatchOutcome.CANCELLED

        # Read again: the file may have changed while the prompt was open.
        try:
            data = await self.host.read_binary(file)
        except ReadError:
            return self._read_failed(file)

        # requests picks the multipart boundary and Content-Type itself.
        return await self._deliver(
            DOCUMENT_MESSAGES,
            self.settings.embeddings_webhook_url,
            headers={"Authorization": basic_auth_header(self.settings.credentials)},
            files={"file": (file.name, data, PDF_MIME)},
            data={"baseDir": namespace},
        )

    async def _deliver(self, messages: dict, url: str, **kwargs) -> DispatchOutcome:
        try:
            resp = await asyncio.to_thread(post_webhook, url, **kwargs)
        except HttpStatusError as exc:
            logger.warning("Webhook %s rejected the upload (HTTP %d).", url, exc.status_code)
            outcome = DispatchOutcome.HTTP_ERROR
        except NetworkError:
            logger.exception("Failed to reach webhook %s", url)
            outcome = DispatchOutcome.NETWORK_ERROR
        else:
            logger.info("Delivered to %s (HTTP %d).", url, resp.status_code)
            outcome = DispatchOutcome.SENT

        self.host.notify(messages[outcome])
        return outcome

    def _read_failed(self, file: VaultFile) -> DispatchOutcome:
        logger.exception("Failed to read %s", file.path)
        self.host.notify(f"Could not read {file.name}.")
        return DispatchOutcome.READ_FAILED
