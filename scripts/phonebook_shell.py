#!/usr/bin/env python3
"""Interactive phonebook shell against a live person collection.

Commands:
    list                 show the (filtered) numbers
    add NAME NUMBER      add a person, or replace the number of an existing one
    delete ID            delete a person
    filter [TEXT]        set the name filter (empty clears it)
    quit                 leave

Configuration comes from ``PHONEDIR_*`` environment variables; ``--base-url``
overrides ``PHONEDIR_BASE_URL``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from phonedir import (  # noqa: E402
    DirectoryClient,
    DirectoryConfig,
    DirectoryController,
    DirectoryView,
    IntentOutcome,
)


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in {"y", "yes"}


def _render(view: DirectoryView) -> None:
    if view.notification is not None:
        marker = "!!" if view.notification.is_error else "ok"
        print(f"[{marker}] {view.notification.message}")
    if view.filter_text:
        print(f"filter shown with: {view.filter_text}")
    print("Numbers")
    for person in view.visible_persons:
        print(f"  {person.id:>24}  {person.name} {person.number}")


async def _run_command(controller: DirectoryController, line: str) -> bool:
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        print(f"parse error: {exc}")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    if command in {"quit", "exit"}:
        return False
    if command == "list":
        _render(controller.view)
    elif command == "add":
        if not args:
            print("usage: add NAME [NUMBER]")
            return True
        controller.set_draft_name(args[0])
        controller.set_draft_number(" ".join(args[1:]))
        outcome = await controller.submit()
        if outcome is IntentOutcome.IGNORED:
            print("name is empty, nothing to do")
        _render(controller.view)
    elif command == "delete":
        if len(args) != 1:
            print("usage: delete ID")
            return True
        outcome = await controller.delete(args[0])
        if outcome is IntentOutcome.IGNORED:
            print(f"no person with id {args[0]}")
        _render(controller.view)
    elif command == "filter":
        controller.change_filter(" ".join(args))
        _render(controller.view)
    else:
        print(f"unknown command: {command}")
    return True


async def _main(args: argparse.Namespace) -> int:
    overrides = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    config = DirectoryConfig.from_env(**overrides)

    async with DirectoryClient(config) as client:
        controller = DirectoryController(
            client,
            _confirm,
            notification_timeout=config.notification_timeout,
        )
        try:
            if await controller.load() is IntentOutcome.FAILED:
                _render(controller.view)
                return 1
            print("Phonebook")
            _render(controller.view)
            loop = asyncio.get_running_loop()
            while True:
                line = await loop.run_in_executor(None, input, "> ")
                if not await _run_command(controller, line):
                    break
        except (EOFError, KeyboardInterrupt):
            print()
        finally:
            controller.close()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", help="person collection URL")
    parser.add_argument("--debug", action="store_true", help="enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
