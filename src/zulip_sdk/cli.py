"""Interactive command-line example for the Zulip SDK.

Asks for one command, the account details and the command's parameters,
runs that single command and prints its result. ``main`` returns an exit
code instead of exiting, so the caller decides how the process ends.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple

from pydantic import BaseModel

from zulip_sdk.client import ZulipClient
from zulip_sdk.config import ZulipConfig
from zulip_sdk.errors import ZulipError
from zulip_sdk.models import MessageType
from zulip_sdk.utils import configure_logging
from zulip_sdk.utils import split_list

logger = logging.getLogger(__name__)

# (label, value) to print, or None for a bare "Success."
CommandResult = Optional[Tuple[str, Any]]
Handler = Callable[[ZulipClient, "Prompter"], Awaitable[CommandResult]]


class CommandError(Exception):
    """Invalid command-line input."""


class Prompter:
    """Reads named parameters from the user, one line each."""

    def __init__(
        self,
        read: Callable[[], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.read = read
        self.write = write

    def text(self, name: str, allow_empty: bool = False) -> str:
        self.write(f"\n{name}:")
        try:
            value = self.read()
        except EOFError:
            raise CommandError(f"No {name} entered") from None
        if value == "" and not allow_empty:
            raise CommandError(f"No {name} entered")
        return value

    def boolean(self, name: str) -> bool:
        return self.text(name) == "true"

    def integer(self, name: str) -> int:
        value = self.text(name)
        try:
            return int(value)
        except ValueError:
            raise CommandError(f"Invalid {name}: {value}") from None

    def items(self, name: str) -> List[str]:
        return split_list(self.text(f"{name} (comma-separated)", allow_empty=True))


def _stream_narrow(stream: str) -> List[List[str]]:
    return [["stream", stream]]


# ============================================================================
# Command handlers
# ============================================================================

async def _messages_send(client: ZulipClient, ask: Prompter) -> CommandResult:
    message_type = ask.text("message type")
    to = ask.text("to")
    subject = ask.text("subject")
    content = ask.text("content")

    is_stream = message_type in ("stream", "MessageType.streamMessage")
    message_id = await client.messages.send(
        MessageType.STREAM if is_stream else MessageType.PRIVATE,
        to=to if is_stream else split_list(to),
        subject=subject,
        content=content,
    )
    return "id", message_id


async def _messages_get(client: ZulipClient, ask: Prompter) -> CommandResult:
    stream = ask.text("stream")
    anchor = ask.integer("anchor")
    num_before = ask.integer("amount before")
    num_after = ask.integer("amount after")

    messages = await client.messages.get(
        narrow=_stream_narrow(stream),
        anchor=anchor,
        num_before=num_before,
        num_after=num_after,
    )
    return "messages", messages


async def _messages_render(client: ZulipClient, ask: Prompter) -> CommandResult:
    return "rendered", await client.messages.render(ask.text("content"))


async def _messages_update(client: ZulipClient, ask: Prompter) -> CommandResult:
    message_id = ask.integer("message ID")
    content = ask.text("content")
    await client.messages.update(message_id, content)
    return None


async def _streams_get_all(client: ZulipClient, ask: Prompter) -> CommandResult:
    streams = await client.streams.get_all(
        include_public=ask.boolean("include public"),
        include_subscribed=ask.boolean("include subscribed"),
        include_default=ask.boolean("include default"),
        include_all_active=ask.boolean("include all active"),
    )
    return "streams", streams


async def _streams_get_id(client: ZulipClient, ask: Prompter) -> CommandResult:
    return "ID", await client.streams.get_id(ask.text("name"))


async def _streams_get_subscribed(client: ZulipClient, ask: Prompter) -> CommandResult:
    return "streams", await client.streams.get_subscribed()


async def _streams_subscribe(client: ZulipClient, ask: Prompter) -> CommandResult:
    stream = ask.text("stream")
    principals = ask.items("principals")
    result = await client.streams.subscribe([{"name": stream}], principals)
    return "`subscribed`, `already_subscribed`, `unauthorized`", result


async def _streams_unsubscribe(client: ZulipClient, ask: Prompter) -> CommandResult:
    stream = ask.text("stream")
    principals = ask.items("principals")
    result = await client.streams.unsubscribe([stream], principals)
    return "`removed`, `not_subscribed`", result


async def _users_get_all(client: ZulipClient, ask: Prompter) -> CommandResult:
    users = await client.users.get_all(client_gravatar=ask.boolean("client gravatar"))
    return "users", users


async def _users_get_current(client: ZulipClient, ask: Prompter) -> CommandResult:
    profile = await client.users.get_current(client_gravatar=ask.boolean("client gravatar"))
    return "profile", profile


async def _users_create(client: ZulipClient, ask: Prompter) -> CommandResult:
    await client.users.create(
        email=ask.text("email"),
        password=ask.text("password"),
        full_name=ask.text("full name"),
        short_name=ask.text("short name"),
    )
    return None


async def _events_register(client: ZulipClient, ask: Prompter) -> CommandResult:
    apply_markdown = ask.boolean("apply markdown")
    client_gravatar = ask.boolean("client gravatar")
    event_types = ask.items("event types")
    all_public_streams = ask.boolean("all public streams")
    include_subscribers = ask.boolean("include subscribers")
    stream = ask.text("stream name")

    queue = await client.events.register(
        apply_markdown=apply_markdown,
        client_gravatar=client_gravatar,
        event_types=event_types,
        all_public_streams=all_public_streams,
        include_subscribers=include_subscribers,
        narrow=_stream_narrow(stream),
    )
    return "queue", queue


async def _events_get(client: ZulipClient, ask: Prompter) -> CommandResult:
    queue_id = ask.text("queue ID")
    last_event_id = ask.integer("last event ID")
    dont_block = ask.boolean("don't block")
    events = await client.events.get(queue_id, last_event_id, dont_block=dont_block)
    return "events", events


async def _events_delete_queue(client: ZulipClient, ask: Prompter) -> CommandResult:
    await client.events.delete_queue(ask.text("queue ID"))
    return None


COMMANDS: Dict[str, Handler] = {
    "messages.send": _messages_send,
    "messages.get": _messages_get,
    "messages.render": _messages_render,
    "messages.update": _messages_update,
    "streams.getAll": _streams_get_all,
    "streams.getID": _streams_get_id,
    "streams.getSubscribed": _streams_get_subscribed,
    "streams.subscribe": _streams_subscribe,
    "streams.unsubscribe": _streams_unsubscribe,
    "users.getAll": _users_get_all,
    "users.getCurrent": _users_get_current,
    "users.create": _users_create,
    "events.register": _events_register,
    "events.get": _events_get,
    "events.deleteQueue": _events_delete_queue,
}


# ============================================================================
# Entry point
# ============================================================================

def format_value(value: Any) -> str:
    """Render a command result for the terminal."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return str(value)


async def run_command(
    config: ZulipConfig,
    handler: Handler,
    prompter: Prompter,
    client: Optional[ZulipClient] = None,
) -> CommandResult:
    """Run one handler against a client that is closed afterwards."""
    async with (client or ZulipClient(config=config)) as active:
        return await handler(active, prompter)


def main(
    read: Callable[[], str] = input,
    write: Callable[[str], None] = print,
    client: Optional[ZulipClient] = None,
) -> int:
    """Run the interactive example once.

    Args:
        read: Line reader
        write: Line writer
        client: Client to use instead of one built from the entered account

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    configure_logging(os.getenv("ZULIP_LOG_LEVEL", "WARNING"))
    prompter = Prompter(read, write)

    write("Which function would you like to test?")
    write(f"(possible options: {', '.join(f'`{name}`' for name in COMMANDS)})")

    try:
        command = prompter.text("command")
        handler = COMMANDS.get(command)
        if handler is None:
            raise CommandError("Incorrect command")

        config = ZulipConfig(
            email=prompter.text("Email address"),
            api_key=prompter.text("API key"),
            realm_url=prompter.text("Realm URL"),
        )
        result = asyncio.run(run_command(config, handler, prompter, client))
    except (CommandError, ZulipError) as e:
        logger.debug(f"Command failed: {e!r}")
        write(f"\nError: {str(e).rstrip('.')}.")
        return 1

    if result is None:
        write("\nSuccess.")
    else:
        label, value = result
        write(f"\n{label}: {format_value(value)}")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
