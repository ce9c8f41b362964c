import pytest
from datetime import date, datetime
from freezegun import freeze_time

from careshift.core.exceptions import ParseError, ValidationError
from careshift.models.shared.enums import DayOfWeek
from careshift.utils.time_resolution import (
    format_time_of_day,
    format_weekdays,
    next_occurrence,
    normalize_weekdays,
    parse_custom_schedule_text,
    parse_time_of_day,
    parse_weekday,
    resolve_end_time,
    resolve_shift_window,
    to_24_hour,
)

SUNDAY = date(2026, 10, 18)
WEDNESDAY = date(2026, 10, 21)


class TestNextOccurrence:
    """Resolving a weekday set to the nearest concrete date"""

    def test_reference_day_matches_itself(self):
        assert next_occurrence(["wednesday"], today=WEDNESDAY) == WEDNESDAY

    def test_earliest_matching_day_wins(self):
        assert next_occurrence(["wednesday", "monday"], today=SUNDAY) == date(2026, 10, 19)

    def test_wraps_into_next_week(self):
        # Tuesday is six days after Wednesday
        assert next_occurrence(["tuesday"], today=WEDNESDAY) == date(2026, 10, 27)

    def test_accepts_enum_members_and_mixed_case(self):
        assert next_occurrence([DayOfWeek.FRIDAY], today=SUNDAY) == date(2026, 10, 23)
        assert next_occurrence(["FRIDAY"], today=SUNDAY) == date(2026, 10, 23)

    @freeze_time("2026-10-18 12:00:00")
    def test_defaults_to_today_in_configured_timezone(self):
        assert next_occurrence(["sunday"]) == SUNDAY
        assert next_occurrence(["monday"]) == date(2026, 10, 19)

    def test_empty_day_set_is_rejected(self):
        with pytest.raises(ValidationError):
            next_occurrence([], today=SUNDAY)

    def test_unknown_day_is_a_parse_error(self):
        with pytest.raises(ParseError):
            next_occurrence(["funday"], today=SUNDAY)


class TestShiftWindow:
    """Building start/end timestamps with overnight correction"""

    def test_same_day_window(self):
        start, end = resolve_shift_window(date(2026, 10, 19), "08:00", "16:00")
        assert start == datetime(2026, 10, 19, 8, 0)
        assert end == datetime(2026, 10, 19, 16, 0)

    def test_overnight_window_ends_next_day(self):
        day = next_occurrence(["monday", "wednesday"], today=SUNDAY)
        start, end = resolve_shift_window(day, "22:00", "06:00")
        assert start == datetime(2026, 10, 19, 22, 0)
        assert end == datetime(2026, 10, 20, 6, 0)

    def test_equal_start_and_end_is_a_full_day(self):
        start = datetime(2026, 10, 19, 8, 0)
        assert resolve_end_time(start, "08:00") == datetime(2026, 10, 20, 8, 0)

    def test_end_always_after_start(self):
        for end_of_day in ("00:00", "07:59", "08:00", "08:01", "23:59"):
            start = datetime(2026, 10, 19, 8, 0)
            assert resolve_end_time(start, end_of_day) > start


class TestParsing:
    def test_parse_time_of_day(self):
        parsed = parse_time_of_day("06:30")
        assert (parsed.hour, parsed.minute) == (6, 30)

    @pytest.mark.parametrize("value", ["25:00", "9am", "12:60", "", "noon"])
    def test_malformed_time_of_day(self, value):
        with pytest.raises(ParseError):
            parse_time_of_day(value)

    def test_parse_weekday(self):
        assert parse_weekday(" Saturday ") == DayOfWeek.SATURDAY
        with pytest.raises(ParseError):
            parse_weekday("someday")

    def test_normalize_weekdays_drops_duplicates(self):
        assert normalize_weekdays(["monday", "Monday", "friday"]) == [DayOfWeek.MONDAY, DayOfWeek.FRIDAY]

    def test_to_24_hour(self):
        assert to_24_hour("9 AM") == "09:00"
        assert to_24_hour("9:30pm") == "21:30"
        assert to_24_hour("12 AM") == "00:00"
        assert to_24_hour("12 PM") == "12:00"
        with pytest.raises(ParseError):
            to_24_hour("13 PM")


class TestFormatting:
    @pytest.mark.parametrize("value, expected", [
        ("22:00", "10:00 PM"),
        ("00:30", "12:30 AM"),
        ("12:00", "12:00 PM"),
        ("06:05", "6:05 AM"),
    ])
    def test_format_time_of_day(self, value, expected):
        assert format_time_of_day(value) == expected

    def test_format_weekdays(self):
        assert format_weekdays(["monday", "wednesday"]) == "Monday, Wednesday"


class TestScheduleText:
    """Free-text schedules such as 'Monday - Friday 9 AM - 5 PM'"""

    def test_ranges_and_multiple_entries(self):
        definitions = parse_custom_schedule_text("Monday - Friday 9 AM - 5 PM, Saturday 10 AM - 2 PM")

        assert len(definitions) == 2
        assert definitions[0]["days"] == ["monday", "tuesday", "wednesday", "thursday", "friday"]
        assert definitions[0]["start_time"] == "09:00"
        assert definitions[0]["end_time"] == "17:00"
        assert definitions[1]["days"] == ["saturday"]
        assert (definitions[1]["start_time"], definitions[1]["end_time"]) == ("10:00", "14:00")
        assert definitions[1]["title"] == "Custom schedule: Saturday 10 AM - 2 PM"

    def test_day_list(self):
        (definition,) = parse_custom_schedule_text("Monday & Wednesday 7 PM - 7 AM")
        assert definition["days"] == ["monday", "wednesday"]
        assert (definition["start_time"], definition["end_time"]) == ("19:00", "07:00")

    def test_range_wraps_over_the_weekend(self):
        (definition,) = parse_custom_schedule_text("Friday - Monday 8 AM - 8 PM")
        assert definition["days"] == ["friday", "saturday", "sunday", "monday"]

    @pytest.mark.parametrize("text", ["", "   ", "whenever works", "Funday 9 AM - 5 PM", "Monday 9 - 5"])
    def test_unparseable_text(self, text):
        with pytest.raises(ParseError):
            parse_custom_schedule_text(text)
