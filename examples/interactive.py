#!/usr/bin/env python3
"""
Example: interactive tour of the Zulip SDK.

Prompts for a command (e.g. `messages.send`), your account details and the
command's parameters, then runs that one command and prints the result.
"""

import sys

from zulip_sdk.cli import main

if __name__ == "__main__":
    sys.exit(main())
