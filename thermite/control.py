import argparse
import json
import logging
import sys
from datetime import datetime

from thermite.common.logging import get_logger, set_level
from thermite.parsers.errors import ScheduleCodecError
from thermite.parsers.schedule_parsers import get_parser
from thermite.settings.heater import DEFAULT_HYSTERESIS, Heater
from thermite.settings.user_settings import UserSettings

L = get_logger(__name__)


def _parse_slots(text: str) -> list:
    """Parses comma separated slot values, e.g. "3,0,1,0,0,0,2"."""
    return [int(value) for value in text.split(",")]


def _load_settings(path: str) -> UserSettings:
    settings = UserSettings()
    if path == "-":
        L.info("Reading settings from standard input...")
        root = json.load(sys.stdin)
    else:
        L.info(f"Reading settings from {path}...")
        with open(path, "r") as f:
            root = json.load(f)
    if not settings.update_from_json_safe(root):
        raise ValueError(f"Invalid settings document: {path}")
    return settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encodes, decodes and resolves thermostat schedules.", allow_abbrev=False)
    parser.add_argument('--settings', type=str, help='Settings JSON file to load, or - for standard input. Defaults to the factory settings.')
    parser.add_argument('--print-settings', action='store_true', help='Prints the settings in formatted JSON.')
    parser.add_argument('--describe', action='store_true', help='Prints the settings with every schedule decoded into slots.')
    parser.add_argument('--target-temp', type=str, metavar='ISO_DATETIME', help='Prints the target temperature at the given local time.')
    parser.add_argument('--decode-daily', type=str, metavar='HEX', help='Decodes 12 hex encoded bytes into 48 daily slots.')
    parser.add_argument('--encode-daily', type=str, metavar='SLOTS', help='Encodes 48 comma separated daily slots into hex.')
    parser.add_argument('--decode-weekly', type=str, metavar='INT', help='Decodes a packed weekly schedule (decimal or 0x prefixed hex).')
    parser.add_argument('--encode-weekly', type=str, metavar='SLOTS', help='Encodes 7 comma separated weekly slots.')
    parser.add_argument('--heater', type=float, metavar='TEMP', help='Prints whether a heater that is currently off turns on at the given temperature. Uses the target at --target-temp, or now.')
    parser.add_argument('--hysteresis', type=float, default=DEFAULT_HYSTERESIS, help='Heater hysteresis in degrees Celsius. Defaults to 1.0.')
    parser.add_argument('--verbose', action='store_true', help='Enables debug logging.')
    return parser


def run(args) -> int:
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        settings = _load_settings(args.settings) if args.settings else UserSettings()

        if args.decode_daily is not None:
            slots = get_parser("schedule").parse_value(bytes.fromhex(args.decode_daily))
            print(json.dumps(slots))
        if args.encode_daily is not None:
            encoded = get_parser("schedule").encode_value(_parse_slots(args.encode_daily))
            print(encoded.hex())
        if args.decode_weekly is not None:
            slots = get_parser("weeklySchedule").parse_value(int(args.decode_weekly, 0))
            print(json.dumps(slots))
        if args.encode_weekly is not None:
            encoded = get_parser("weeklySchedule").encode_value(_parse_slots(args.encode_weekly))
            print(f"0x{encoded:04x}")
        if args.print_settings:
            print(json.dumps(settings.to_json(), indent=4))
        if args.describe:
            print(json.dumps(settings.describe(), indent=4))
        t = datetime.fromisoformat(args.target_temp) if args.target_temp is not None else None
        if t is not None:
            print(settings.get_target_temperature(t))
        if args.heater is not None:
            target = settings.get_target_temperature(t if t is not None else datetime.now())
            heater = Heater(hysteresis=args.hysteresis)
            print("on" if heater.update(args.heater, target) else "off")
    except json.JSONDecodeError as e:
        L.error(f"Invalid JSON: {e}")
        return 1
    except ScheduleCodecError as e:
        L.error(f"Invalid schedule: {e}")
        return 1
    except (OSError, ValueError) as e:
        L.error(f"An error occurred: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0
    return run(parser.parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
