"""Basic usage examples for the Zulip Python SDK."""

import asyncio

from zulip_sdk import MessageType
from zulip_sdk import ZulipAPIError
from zulip_sdk import ZulipClient


async def basic_client_usage():
    """Send a message and look around the realm."""

    # Reads ZULIP_EMAIL, ZULIP_API_KEY and ZULIP_REALM_URL
    client = ZulipClient.from_env()

    async with client:
        profile = await client.users.get_current()
        print(f"Logged in as {profile.get('full_name')} ({profile.get('email')})")

        streams = await client.streams.get_subscribed()
        print(f"Subscribed to {len(streams)} streams")

        message_id = await client.messages.send(
            MessageType.STREAM,
            to="general",
            subject="sdk demo",
            content="Hello from the **Zulip Python SDK**!",
        )
        print(f"Sent message {message_id}")

        await client.messages.update(message_id, "Hello again, edited.")

        html = await client.messages.render("*rendered* on the server")
        print(f"Rendered: {html}")


async def error_handling():
    """Server-side errors arrive as ZulipAPIError."""

    async with ZulipClient.from_env() as client:
        try:
            await client.streams.get_id("a stream that does not exist")
        except ZulipAPIError as e:
            print(f"Lookup failed: {e.message} (code={e.code})")


async def poll_events():
    """Register a queue and poll it a few times.

    The SDK does not loop for you: keep the last event ID and pass it back.
    """

    async with ZulipClient.from_env() as client:
        queue = await client.events.register(event_types=["message"])
        last_event_id = queue.last_event_id

        try:
            for _ in range(3):
                events = await client.events.get(
                    queue.queue_id, last_event_id, dont_block=True
                )
                for event in events:
                    print(f"Event {event['id']}: {event['type']}")
                    last_event_id = max(last_event_id, event["id"])
                await asyncio.sleep(1)
        finally:
            await client.events.delete_queue(queue.queue_id)


async def main():
    """Run all examples."""
    print("=== Basic usage ===")
    await basic_client_usage()

    print("\n=== Error handling ===")
    await error_handling()

    print("\n=== Event polling ===")
    await poll_events()


if __name__ == "__main__":
    asyncio.run(main())
