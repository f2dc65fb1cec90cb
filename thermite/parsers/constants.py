# Daily schedule: 48 half-hour periods, 4 per byte
DAILY_SLOT_COUNT = 48
DAILY_BYTE_COUNT = 12
SLOTS_PER_BYTE = 4

# Weekly schedule: one slot per day, day 0 is Sunday
WEEKLY_SLOT_COUNT = 7
WEEKLY_MASK = 0x3FFF

SLOT_BITS = 2
SLOT_MASK = 0x3
SLOT_VALUE_MAX = 3
BYTE_VALUE_MAX = 0xFF

SET_POINT_COUNT = 4
DAILY_SCHEDULE_COUNT = 4
NAME_MAX = 15

# Celsius
TEMP_MIN = 0.0
TEMP_MAX = 40.0

SET_POINT_SYMBOLS = [
    {"color": "red", "icon": "mdi-circle"},
    {"color": "blue", "icon": "mdi-star"},
    {"color": "orange", "icon": "mdi-square"},
    {"color": "green", "icon": "mdi-triangle"},
]
