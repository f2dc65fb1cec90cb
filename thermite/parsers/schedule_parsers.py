from thermite.common.logging import get_logger
from thermite.parsers.daily_schedule import DailySchedule
from thermite.parsers.weekly_schedule import WeeklySchedule

L = get_logger(__name__)


class ScheduleParser:
    """Base class for settings field parsers."""
    def parse_value(self, value):
        """Parses the packed value of a settings field.

        Returns:
            A list of slot values.
        """
        raise NotImplementedError

    def encode_value(self, value):
        """Encodes slot values for a settings field.

        Returns:
            The packed value.
        """
        raise NotImplementedError


class DailyScheduleParser(ScheduleParser):
    """Parses the 12-byte schedule of a named daily schedule."""
    def parse_value(self, value):
        slots = DailySchedule.decode_bytes(value)
        L.debug(f"Decoded daily schedule {bytes(value).hex()}")
        return slots

    def encode_value(self, slots):
        """Encodes 48 slot values into a bytearray."""
        encoded = DailySchedule.encode_bytes(slots)
        L.debug(f"Encoded daily schedule {encoded.hex()}")
        return encoded


class WeeklyScheduleParser(ScheduleParser):
    """Parses a packed weekly schedule."""
    def parse_value(self, value):
        slots = WeeklySchedule.decode(value)
        L.debug(f"Decoded weekly schedule 0x{value:04x}")
        return slots

    def encode_value(self, slots):
        """Encodes 7 slot values into an int."""
        encoded = WeeklySchedule.encode(slots)
        L.debug(f"Encoded weekly schedule 0x{encoded:04x}")
        return encoded


# Parser registry, keyed by settings field name
PARSERS = {
    "schedule": DailyScheduleParser(),
    "weeklyschedule": WeeklyScheduleParser(),
    "weeklyscheduletemporary": WeeklyScheduleParser(),
}

def get_parser(field):
    """Returns a parser instance for the given settings field, if one exists."""
    return PARSERS.get(field.lower())
