import argparse
import sys
from typing import Optional

from ballou_gateway import ConfigurationError, MalformedResponseError, make_from_settings
from ballou_gateway.config import get_settings
from ballou_gateway.logging import setup_logging

# ==============================================================================
# Credentials are read from the environment (or a .env file):
#   BALLOU_TOKEN, BALLOU_UN, BALLOU_PW, BALLOU_CR, BALLOU_RI, BALLOU_O,
#   BALLOU_D, BALLOU_LONGSMS, BALLOU_LOG_LEVEL
# ==============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one SMS through the Ballou gateway.")
    parser.add_argument("message", help="The content of the SMS message to send.")
    parser.add_argument("--to", dest="destination", help="Recipient number, overrides BALLOU_D.")
    parser.add_argument("--sender", help="Originator name, overrides BALLOU_O.")
    parser.add_argument("--long", action="store_true", help="Allow concatenated long SMS.")
    return parser


def send_sms(message: str, destination: Optional[str] = None, sender: Optional[str] = None,
             long_sms: bool = False) -> int:
    """
    Sends an SMS through Ballou and prints the outcome.

    Returns the process exit code: 0 when the provider accepted the message,
    1 when it did not, 2 when the gateway is not configured.
    """
    options = {}
    if destination:
        options["D"] = destination
    if sender:
        options["O"] = sender
    if long_sms:
        options["LONGSMS"] = "1"

    try:
        gateway = make_from_settings()
    except ConfigurationError as exc:
        print(f"\n❌ Gateway is not configured: {exc}")
        print("   - Set BALLOU_TOKEN (and your Ballou credentials) in the environment.")
        return 2

    print(f"🚀 Sending request to: {gateway.build_url(gateway.send_path)}")
    print(f"   - Recipient: {options.get('D') or gateway.config.get('D', '')}")

    try:
        response = gateway.notify(message, options)
    except MalformedResponseError as exc:
        print(f"\n❌ Ballou returned an unreadable response: {exc}")
        return 1

    if response.success:
        print("\n✅ Message accepted by Ballou!")
        print(f"   - Provider Message: {response.message}")
        return 0

    print(f"\n❌ Message was not sent (Status Code: {response.raw.status_code})")
    print(f"   - Error Message: {response.message}")
    return 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, service=settings.service_name)
    return send_sms(args.message, destination=args.destination, sender=args.sender, long_sms=args.long)


if __name__ == "__main__":
    sys.exit(main())
