from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .config import get_settings
from .errors import SmsError
from .gateway import send_sms
from .sms import Encoding, SmsFlag

FLAG_CHOICES = {flag.name.lower(): flag for flag in SmsFlag}
ENCODING_CHOICES = {encoding.value: encoding for encoding in Encoding}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esteria-sms",
        description="Send a single SMS through the configured gateway.",
    )
    parser.add_argument("number", type=str, help="Destination number, e.g. +420123456789.")
    parser.add_argument("text", type=str, help="Message body.")
    parser.add_argument("--sender", type=str, default=None, help="Overrides ESTERIA_SENDER.")
    parser.add_argument(
        "--time",
        type=datetime.fromisoformat,
        default=None,
        help="Schedule delivery (ISO 8601; naive values are UTC).",
    )
    parser.add_argument("--dlr-url", type=str, default=None, help="Delivery report callback URL.")
    parser.add_argument("--expired", type=int, default=None, help="Expiry in minutes.")
    parser.add_argument("--user-key", type=str, default=None, help="Caller tracking token.")
    parser.add_argument(
        "--encoding",
        choices=sorted(ENCODING_CHOICES),
        default=Encoding.EIGHT_BIT.value,
    )
    parser.add_argument(
        "--flag",
        dest="flags",
        action="append",
        choices=sorted(FLAG_CHOICES),
        default=[],
        help="Gateway flag; may be repeated.",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> dict[str, Any]:
    options: dict[str, Any] = {
        "encoding": ENCODING_CHOICES[args.encoding],
        "flags": frozenset(FLAG_CHOICES[name] for name in args.flags),
    }
    if args.sender is not None:
        options["sender"] = args.sender
    if args.time is not None:
        options["scheduled_time"] = args.time
    if args.dlr_url is not None:
        options["delivery_report_url"] = args.dlr_url
    if args.expired is not None:
        options["expiry_minutes"] = args.expired
    if args.user_key is not None:
        options["user_key"] = args.user_key
    return options


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        message_id = asyncio.run(send_sms(args.number, args.text, **_options_from_args(args)))
    except ValidationError as exc:
        print(f"error: invalid message: {exc}", file=sys.stderr)
        return 1
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except SmsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(message_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
