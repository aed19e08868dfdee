"""
Namespace Prompt — a small modal asking the user to confirm or edit the
namespace a file is sent under.

The host renders the prompt and feeds it keystrokes (``set_value``) and the
final ``submit`` or ``dismiss``.  ``ask_namespace`` wraps the callback pair
in a future so a dispatch can simply ``await`` the user's answer.
"""

import asyncio
import logging
from typing import Callable

from note_dispatch.host import Host

logger = logging.getLogger(__name__)


class NamespacePrompt:
    """Editable namespace draft with a one-shot completion callback."""

    def __init__(
        self,
        initial_namespace: str,
        on_submit: Callable[[str], None],
        title: str,
        description: str,
        on_cancel: Callable[[], None] | None = None,
    ):
        self.namespace = initial_namespace
        self.on_submit = on_submit
        self.on_cancel = on_cancel
        self.title = title
        self.description = description
        self.placeholder = "namespace"
        self.is_open = False
        self._closed = False

    def open(self, host: Host) -> None:
        self.is_open = True
        host.open_prompt(self)

    def set_value(self, value: str) -> None:
        self.namespace = value

    def submit(self) -> None:
        """Close and hand the current draft to the completion callback."""
        if self._close():
            self.on_submit(self.namespace)

    def dismiss(self) -> None:
        """Close without confirming; the completion callback never runs."""
        if self._close() and self.on_cancel is not None:
            self.on_cancel()

    def _close(self) -> bool:
        if self._closed:
            return False
        self._closed = True
        self.is_open = False
        return True


async def ask_namespace(
    host: Host, initial: str, title: str, description: str
) -> str | None:
    """
    Open a prompt seeded with *initial* and wait for the user.

    Returns the confirmed namespace, or ``None`` if the prompt was dismissed.
    """
    future = asyncio.get_running_loop().create_future()

    def _resolve(value: str | None) -> None:
        if not future.done():
            future.set_result(value)

    prompt = NamespacePrompt(
        initial,
        _resolve,
        title,
        description,
        on_cancel=lambda: _resolve(None),
    )
    prompt.open(host)
    namespace = await future
    if namespace is None:
        logger.info("Namespace prompt '%s' dismissed.", title)
    return namespace
