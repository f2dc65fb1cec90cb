from datetime import datetime

from thermite.common.logging import get_logger
from thermite.parsers.constants import (
    DAILY_SCHEDULE_COUNT,
    DAILY_SLOT_COUNT,
    NAME_MAX,
    SET_POINT_COUNT,
    SET_POINT_SYMBOLS,
    SLOT_VALUE_MAX,
    TEMP_MAX,
    TEMP_MIN,
    WEEKLY_MASK,
)
from thermite.parsers.daily_schedule import DailySchedule
from thermite.parsers.errors import ScheduleCodecError
from thermite.parsers.schedule_parsers import get_parser
from thermite.parsers.weekly_schedule import WeeklySchedule

L = get_logger(__name__)


def _half_hour_slots(*periods):
    """Expands (start_hour, end_hour, slot) periods into 48 half-hour slots."""
    slots = [0] * DAILY_SLOT_COUNT
    for start_hour, end_hour, slot in periods:
        for i in range(start_hour * 2, end_hour * 2):
            slots[i] = slot
    return slots


# Set point indices used by the factory daily schedules
_HOME_OFFICE, _NORMAL, _SLEEP = 0, 1, 2

DEFAULT_SET_POINTS = [
    ("Home Office", 20.0),
    ("Normal", 17.0),
    ("Sleep", 16.0),
    ("Vacation", 14.0),
]

DEFAULT_DAILY_SCHEDULES = [
    ("Work from Home", _half_hour_slots(
        (0, 7, _SLEEP), (7, 8, _NORMAL), (8, 17, _HOME_OFFICE), (17, 21, _NORMAL), (21, 24, _SLEEP))),
    ("At the Office", _half_hour_slots((0, 7, _SLEEP), (7, 21, _NORMAL), (21, 24, _SLEEP))),
    ("Day Off", _half_hour_slots((0, 8, _SLEEP), (8, 22, _NORMAL), (22, 24, _SLEEP))),
    ("Other", _half_hour_slots((0, 8, _SLEEP), (8, 22, _NORMAL), (22, 24, _SLEEP))),
]

# Sunday and Saturday use "Day Off", weekdays use "Work from Home"
DEFAULT_WEEKLY_SCHEDULE = 0x2002


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_uint(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_valid_name(value):
    return isinstance(value, str) and 0 < len(value) <= NAME_MAX


def _check(condition, message):
    if not condition:
        L.warning(f"Invalid settings: {message}")
    return condition


class JsonSettings:
    """Base class for settings objects exchanged as JSON documents.

    Every key of a document is optional. Keys that are present are checked by
    validate_json before update_from_json applies them.
    """
    def to_json(self) -> dict:
        raise NotImplementedError

    def validate_json(self, root) -> bool:
        raise NotImplementedError

    def update_from_json(self, root):
        raise NotImplementedError

    def update_from_json_safe(self, root) -> bool:
        """Applies root only if it validates. Returns whether it was applied."""
        if not self.validate_json(root):
            return False
        self.update_from_json(root)
        return True


class SetPoint(JsonSettings):
    """A named target temperature, in degrees Celsius."""

    def __init__(self, name: str, temp_target: float):
        self.name = name[:NAME_MAX]
        self.temp_target = float(temp_target)

    def to_json(self) -> dict:
        return {"name": self.name, "tempTarget": self.temp_target}

    def validate_json(self, root) -> bool:
        if not _check(isinstance(root, dict), "set point is not an object"):
            return False
        if "name" in root and not _check(
            _is_valid_name(root["name"]), f"set point name must be 1 to {NAME_MAX} characters"
        ):
            return False
        if "tempTarget" in root:
            temp_target = root["tempTarget"]
            if not _check(
                _is_number(temp_target) and TEMP_MIN <= temp_target <= TEMP_MAX,
                f"set point temperature {temp_target!r} is outside [{TEMP_MIN}, {TEMP_MAX}]",
            ):
                return False
        return True

    def update_from_json(self, root):
        if "name" in root:
            self.name = root["name"][:NAME_MAX]
        if "tempTarget" in root:
            self.temp_target = float(root["tempTarget"])


class DailyScheduleSetting(JsonSettings):
    """A named daily schedule, stored in its 12-byte packed form.

    Each of its 48 half-hour slots selects one of the four set points.
    """

    def __init__(self, name: str, schedule):
        self.name = name[:NAME_MAX]
        self.schedule = bytearray(schedule)

    @property
    def slots(self) -> list:
        return DailySchedule.decode_bytes(self.schedule)

    def set_slots(self, slots):
        self.schedule = DailySchedule.encode_bytes(slots)

    def to_json(self) -> dict:
        return {"name": self.name, "schedule": list(self.schedule)}

    def validate_json(self, root) -> bool:
        if not _check(isinstance(root, dict), "daily schedule is not an object"):
            return False
        if "name" in root and not _check(
            _is_valid_name(root["name"]), f"daily schedule name must be 1 to {NAME_MAX} characters"
        ):
            return False
        if "schedule" in root:
            schedule = root["schedule"]
            if not _check(isinstance(schedule, list), "daily schedule is not an array"):
                return False
            if not _check(
                not any(isinstance(b, bool) for b in schedule), "daily schedule holds booleans"
            ):
                return False
            try:
                DailySchedule.decode_bytes(schedule)
            except ScheduleCodecError as e:
                L.warning(f"Invalid settings: {e}")
                return False
        return True

    def update_from_json(self, root):
        if "name" in root:
            self.name = root["name"][:NAME_MAX]
        if "schedule" in root:
            self.schedule = bytearray(root["schedule"])


class UserSettings(JsonSettings):
    """
    The user configurable thermostat settings.

    Four set points, four named daily schedules selecting set points per half
    hour, and a weekly schedule selecting a daily schedule per day. A temporary
    weekly schedule replaces the regular one between temporary_start and
    temporary_end (epoch seconds), and vacation mode pins a single set point.
    """

    def __init__(self):
        self.set_points = [SetPoint(name, temp) for name, temp in DEFAULT_SET_POINTS]
        self.daily_schedules = [
            DailyScheduleSetting(name, DailySchedule.encode_bytes(slots))
            for name, slots in DEFAULT_DAILY_SCHEDULES
        ]
        self.weekly_schedule = DEFAULT_WEEKLY_SCHEDULE
        self.weekly_schedule_temporary = DEFAULT_WEEKLY_SCHEDULE
        self.temporary_start = 0
        self.temporary_end = 0
        self.vacation = False
        self.vacation_set_point_index = 3

    def get_target_temperature(self, t: datetime) -> float:
        """
        Resolves the target temperature at local time t.

        The weekly schedule picks the daily schedule for t's weekday, which in
        turn picks the set point for t's half hour.
        """
        if self.vacation:
            return self.set_points[self.vacation_set_point_index].temp_target

        day = t.isoweekday() % 7
        if self.temporary_start <= t.timestamp() < self.temporary_end:
            weekly_schedule = self.weekly_schedule_temporary
        else:
            weekly_schedule = self.weekly_schedule
        daily_index = WeeklySchedule.decode(weekly_schedule)[day]

        slot = t.hour * 2 + t.minute // 30
        set_point_index = self.daily_schedules[daily_index].slots[slot]
        return self.set_points[set_point_index].temp_target

    def to_json(self) -> dict:
        return {
            "setPoints": [set_point.to_json() for set_point in self.set_points],
            "dailySchedules": [daily.to_json() for daily in self.daily_schedules],
            "weeklySchedule": self.weekly_schedule,
            "weeklyScheduleTemporary": self.weekly_schedule_temporary,
            "temporaryStart": self.temporary_start,
            "temporaryEnd": self.temporary_end,
            "vacation": self.vacation,
            "vacationSetPointIndex": self.vacation_set_point_index,
        }

    def describe(self) -> dict:
        """Returns the settings with every schedule decoded into slot values."""
        daily_parser = get_parser("schedule")
        weekly_parser = get_parser("weeklySchedule")
        return {
            "setPointSymbols": SET_POINT_SYMBOLS,
            "setPoints": [set_point.to_json() for set_point in self.set_points],
            "dailySchedules": [
                {"name": daily.name, "slots": daily_parser.parse_value(daily.schedule)}
                for daily in self.daily_schedules
            ],
            "days": WeeklySchedule.DAYS_OF_WEEK_ORDER,
            "weeklySchedule": weekly_parser.parse_value(self.weekly_schedule),
            "weeklyScheduleTemporary": weekly_parser.parse_value(self.weekly_schedule_temporary),
            "temporaryStart": self.temporary_start,
            "temporaryEnd": self.temporary_end,
            "vacation": self.vacation,
            "vacationSetPointIndex": self.vacation_set_point_index,
        }

    def _validate_list(self, root, key, items, expected):
        value = root[key]
        if not _check(isinstance(value, list), f"{key} is not an array"):
            return False
        if not _check(len(value) == expected, f"{key} must hold exactly {expected} entries"):
            return False
        return all(item.validate_json(entry) for item, entry in zip(items, value))

    def validate_json(self, root) -> bool:
        if not _check(isinstance(root, dict), "user settings is not an object"):
            return False
        if "setPoints" in root and not self._validate_list(
            root, "setPoints", self.set_points, SET_POINT_COUNT
        ):
            return False
        if "dailySchedules" in root and not self._validate_list(
            root, "dailySchedules", self.daily_schedules, DAILY_SCHEDULE_COUNT
        ):
            return False
        for key in ("weeklySchedule", "weeklyScheduleTemporary"):
            if key in root and not _check(
                _is_uint(root[key]) and root[key] <= WEEKLY_MASK,
                f"{key} {root[key]!r} is outside [0, 0x{WEEKLY_MASK:04x}]",
            ):
                return False
        for key in ("temporaryStart", "temporaryEnd"):
            if key in root and not _check(_is_uint(root[key]), f"{key} must be a non-negative integer"):
                return False
        start = root.get("temporaryStart", self.temporary_start)
        end = root.get("temporaryEnd", self.temporary_end)
        if not _check((start == 0) == (end == 0), "temporaryStart and temporaryEnd must both be set"):
            return False
        if not _check(start == 0 or start < end, "temporaryStart must be before temporaryEnd"):
            return False
        if "vacation" in root and not _check(isinstance(root["vacation"], bool), "vacation must be a boolean"):
            return False
        if "vacationSetPointIndex" in root:
            index = root["vacationSetPointIndex"]
            if not _check(
                _is_uint(index) and index <= SLOT_VALUE_MAX,
                f"vacationSetPointIndex {index!r} is outside [0, {SLOT_VALUE_MAX}]",
            ):
                return False
        return True

    def update_from_json(self, root):
        for set_point, entry in zip(self.set_points, root.get("setPoints", [])):
            set_point.update_from_json(entry)
        for daily, entry in zip(self.daily_schedules, root.get("dailySchedules", [])):
            daily.update_from_json(entry)
        if "weeklySchedule" in root:
            self.weekly_schedule = root["weeklySchedule"]
        if "weeklyScheduleTemporary" in root:
            self.weekly_schedule_temporary = root["weeklyScheduleTemporary"]
        if "temporaryStart" in root:
            self.temporary_start = root["temporaryStart"]
        if "temporaryEnd" in root:
            self.temporary_end = root["temporaryEnd"]
        if "vacation" in root:
            self.vacation = root["vacation"]
        if "vacationSetPointIndex" in root:
            self.vacation_set_point_index = root["vacationSetPointIndex"]
