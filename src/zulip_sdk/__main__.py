"""Run the interactive example with ``python -m zulip_sdk``."""

from zulip_sdk.cli import run

if __name__ == "__main__":
    run()
