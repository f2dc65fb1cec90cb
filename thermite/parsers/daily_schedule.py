from thermite.parsers.constants import (
    BYTE_VALUE_MAX,
    DAILY_BYTE_COUNT,
    DAILY_SLOT_COUNT,
    SLOT_BITS,
    SLOT_MASK,
    SLOT_VALUE_MAX,
    SLOTS_PER_BYTE,
)
from thermite.parsers.errors import ShapeError, check_range


class DailySchedule:
    """
    Converts a day of 48 half-hour slots to and from its 12-byte packed form.

    Byte i holds slots 4i..4i+3, with slot 4i in the two least significant bits.
    """

    @staticmethod
    def decode_bytes(packed) -> list:
        """
        Decodes 12 packed bytes into a list of 48 slot values.

        Args:
            packed: bytes, bytearray or a sequence of ints in [0, 255].

        Raises:
            ShapeError: if packed is not exactly 12 bytes long.
            RangeError: if an element is not an 8-bit value.
        """
        if len(packed) != DAILY_BYTE_COUNT:
            raise ShapeError("Packed daily schedule", DAILY_BYTE_COUNT, len(packed))
        check_range("Packed daily schedule byte", packed, BYTE_VALUE_MAX)

        schedule = []
        for b in packed:
            for field in range(SLOTS_PER_BYTE):
                schedule.append((b >> (field * SLOT_BITS)) & SLOT_MASK)
        return schedule

    @staticmethod
    def encode_bytes(schedule) -> bytearray:
        """
        Encodes 48 slot values into a 12-byte bytearray.

        Raises:
            ShapeError: if schedule does not hold exactly 48 slots.
            RangeError: if a slot value is outside [0, 3].
        """
        if len(schedule) != DAILY_SLOT_COUNT:
            raise ShapeError("Daily schedule", DAILY_SLOT_COUNT, len(schedule))
        check_range("Daily schedule slot", schedule, SLOT_VALUE_MAX)

        encoded_bytes = bytearray(DAILY_BYTE_COUNT)
        for i in range(DAILY_BYTE_COUNT):
            b = 0
            for field in range(SLOTS_PER_BYTE):
                b |= schedule[SLOTS_PER_BYTE * i + field] << (field * SLOT_BITS)
            encoded_bytes[i] = b
        return encoded_bytes
