from thermite.parsers.constants import (
    SLOT_BITS,
    SLOT_MASK,
    SLOT_VALUE_MAX,
    WEEKLY_MASK,
    WEEKLY_SLOT_COUNT,
)
from thermite.parsers.errors import RangeError, ShapeError, check_range


class WeeklySchedule:
    """
    Converts a week of 7 day slots to and from a single 14-bit integer.

    Day 0 (Sunday) is stored in the two least significant bits.
    """

    DAYS_OF_WEEK_ORDER = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

    @staticmethod
    def decode(packed: int) -> list:
        """
        Decodes a packed weekly schedule into a list of 7 slot values.

        Bits above position 13 are ignored.

        Raises:
            RangeError: if packed is negative or not an int.
        """
        if not isinstance(packed, int) or packed < 0:
            raise RangeError("Packed weekly schedule", None, packed, WEEKLY_MASK)
        return [(packed >> (day * SLOT_BITS)) & SLOT_MASK for day in range(WEEKLY_SLOT_COUNT)]

    @staticmethod
    def encode(schedule) -> int:
        """
        Encodes 7 slot values into a packed weekly schedule.

        Raises:
            ShapeError: if schedule does not hold exactly 7 slots.
            RangeError: if a slot value is outside [0, 3].
        """
        if len(schedule) != WEEKLY_SLOT_COUNT:
            raise ShapeError("Weekly schedule", WEEKLY_SLOT_COUNT, len(schedule))
        check_range("Weekly schedule slot", schedule, SLOT_VALUE_MAX)

        packed = 0
        for day, value in enumerate(schedule):
            packed |= value << (day * SLOT_BITS)
        return packed
