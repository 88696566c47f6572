"""
Standalone send harness.

Sends one SMS using the environment's Africa's Talking credentials and
prints the result, or the classified error with troubleshooting tips.
The default number must be registered in the sandbox simulator first.
"""

import argparse
import asyncio
import json
import sys

import structlog

from .application.services import SmsDispatcher
from .config import get_settings
from .domain.errors import ConfigurationError, DispatchError, ErrorKind
from .infrastructure.logging import configure_logging

logger = structlog.get_logger()

DEFAULT_TEST_NUMBER = "+2348082225459"
DEFAULT_TEST_MESSAGE = "Hello Sandbox SMS!"

SANDBOX_SIMULATOR_URL = "https://account.africastalking.com/apps/sandbox"

TROUBLESHOOTING_TIPS: dict[ErrorKind, list[str]] = {
    ErrorKind.INVALID_SENDER_ID: [
        'Verify AT_USERNAME is set to "sandbox" in .env file',
        'Ensure the from field is forced to "sandbox" in sandbox mode',
        "Check that you're using the correct sandbox API key",
    ],
    ErrorKind.AUTH: [
        "Check your AT_API_KEY in the .env file",
        'Verify AT_USERNAME is set to "sandbox"',
        "Make sure you're using a valid sandbox API key",
    ],
    ErrorKind.NETWORK: [
        "Check your internet connection",
        "Verify Africa's Talking API is accessible",
    ],
    ErrorKind.VALIDATION: [
        "Pass a phone number containing at least one digit",
        "Pass a non-empty message",
    ],
}


def troubleshooting_tips(kind: ErrorKind, number: str) -> list[str]:
    """Tips for a failed send, keyed by error kind."""
    if kind in TROUBLESHOOTING_TIPS:
        return TROUBLESHOOTING_TIPS[kind]
    return [
        "Add your phone number to the Sandbox Simulator first",
        f"Go to: {SANDBOX_SIMULATOR_URL}",
        "Navigate to SMS -> Simulator",
        f"Add {number} to the simulator",
    ]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a test SMS via Africa's Talking")
    parser.add_argument("--to", default=DEFAULT_TEST_NUMBER, help="Destination phone number")
    parser.add_argument("--message", default=DEFAULT_TEST_MESSAGE, help="Message text")
    return parser.parse_args(argv)


async def run(dispatcher: SmsDispatcher, to: str, message: str) -> int:
    """Send once and report. Returns the process exit code."""
    print(f"Sending test SMS to: {to}")
    try:
        result = await dispatcher.send(to, message)
    except DispatchError as e:
        print(f"SMS test FAILED: {e}")
        print("Troubleshooting tips:")
        for tip in troubleshooting_tips(e.kind, to):
            print(f"- {tip}")
        return 1

    print("SMS test PASSED")
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the send harness."""
    args = parse_args(argv)
    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging("sms-dispatch")
        logger.error("Invalid configuration", error=str(e))
        print(str(e), file=sys.stderr)
        return 2

    configure_logging(settings.service_name, settings.log_level)
    logger.info("Starting SMS harness", service=settings.service_name, sandbox=settings.is_sandbox)

    dispatcher = SmsDispatcher.from_settings(settings)
    return asyncio.run(run(dispatcher, args.to, args.message))


if __name__ == "__main__":
    sys.exit(main())
