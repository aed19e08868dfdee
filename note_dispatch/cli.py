"""
CLI entry point for the local vault host.

Usage:
  python -m note_dispatch actions <file>          # Menu actions for a file
  python -m note_dispatch send <file>             # Run the file's action
  python -m note_dispatch settings show           # Print the settings panel
  python -m note_dispatch settings set KEY VALUE  # Edit one setting
"""

import argparse
import asyncio
import sys
from pathlib import Path

from note_dispatch.local_host import LocalVaultHost, setup_logging
from note_dispatch.plugin import WebhookDispatchPlugin
from note_dispatch.services.dispatcher import DispatchOutcome
from note_dispatch.services.settings_store import FIELD_KEYS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-dispatch",
        description="Send vault notes and PDFs to automation webhooks.",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to the vault (overrides VAULT_PATH env var).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    actions = sub.add_parser("actions", help="List the menu actions offered for a file.")
    actions.add_argument("file", type=Path, help="File inside the vault.")

    send = sub.add_parser("send", help="Send a file to its webhook.")
    send.add_argument("file", type=Path, help="Markdown note or PDF inside the vault.")

    settings = sub.add_parser("settings", help="Show or edit webhook settings.")
    settings_sub = settings.add_subparsers(dest="settings_command", required=True)
    settings_sub.add_parser("show", help="Print current settings (password masked).")
    set_cmd = settings_sub.add_parser("set", help="Change one setting.")
    set_cmd.add_argument("key", choices=FIELD_KEYS)
    set_cmd.add_argument("value")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging()

    host = LocalVaultHost(vault_path=args.vault)
    plugin = WebhookDispatchPlugin(host)
    plugin.on_activate()

    if args.command == "settings":
        if args.settings_command == "set":
            host.settings_panel.on_change(args.key, args.value)
        print("\n".join(host.settings_panel.render()))
        return

    path = args.file
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        file = host.file_for(path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    menu = host.menu_for(file)

    if args.command == "actions":
        if not menu.items:
            print(f"No actions for .{file.extension} files.")
        for item in menu.items:
            print(f"  {item.title} ({item.icon})")

    elif args.command == "send":
        if not menu.items:
            print(f"Error: nothing to send for .{file.extension} files.", file=sys.stderr)
            sys.exit(1)
        outcome = asyncio.run(menu.items[0].callback())
        if outcome not in (DispatchOutcome.SENT, DispatchOutcome.CANCELLED):
            sys.exit(1)

    plugin.on_deactivate()


if __name__ == "__main__":
    main()
