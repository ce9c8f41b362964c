import logging
from typing import Dict, List, Optional
from datetime import date, timedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careshift.core.config import settings
from careshift.core.exceptions import NotFoundError, ValidationError
from careshift.models.care.care_shift import CareShift
from careshift.models.shared.enums import DayOfWeek, ShiftStatus, WeekdayCoverage, WeekendCoverage
from careshift.schemas.care.shift_schema import (
    CustomShiftDefinition,
    ShiftGenerationResult,
    ShiftPresetResponse,
    ShiftResponse,
    SkippedDefinition,
)
from careshift.services.care.care_plan_service import CarePlanService
from careshift.services.care.care_team_service import CareTeamService
from careshift.services.care.shift_service import derive_shift_status
from careshift.utils.time_resolution import (
    format_time_of_day,
    format_weekdays,
    next_occurrence,
    parse_custom_schedule_text,
    resolve_shift_window,
)

logger = logging.getLogger(__name__)

WEEKDAYS = [DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY, DayOfWeek.FRIDAY]
WEEKEND = [DayOfWeek.SATURDAY, DayOfWeek.SUNDAY]

WEEKDAY_COVERAGE_WINDOWS = {
    WeekdayCoverage.STANDARD: ("08:00", "16:00"),
    WeekdayCoverage.EXTENDED: ("06:00", "18:00"),
    WeekdayCoverage.NIGHT: ("18:00", "08:00"),
}
WEEKEND_COVERAGE_WINDOW = ("06:00", "18:00")

EVENING_DESCRIPTION = "Evening care on weekdays after the primary shift ends, or continuous 24-hour coverage"

SHIFT_PRESETS: Dict[str, ShiftPresetResponse] = {
    p.id: p for p in [
        ShiftPresetResponse(id="weekday_standard", label="Monday - Friday, 8 AM - 4 PM",
                            description="Standard daytime coverage during business hours", start="08:00", end="16:00"),
        ShiftPresetResponse(id="weekday_extended", label="Monday - Friday, 6 AM - 6 PM",
                            description="Extended daytime coverage for more comprehensive care", start="06:00", end="18:00"),
        ShiftPresetResponse(id="weekday_night", label="Monday - Friday, 6 PM - 8 AM",
                            description="Extended nighttime coverage to relieve standard daytime coverage", start="18:00", end="08:00"),
        ShiftPresetResponse(id="saturday_sunday", label="Saturday - Sunday, 6 AM - 6 PM",
                            description="Daytime weekend coverage with a dedicated caregiver", start="06:00", end="18:00"),
        ShiftPresetResponse(id="weekday_evening_4pm_6am", label="Weekday Evening Shift (4 PM - 6 AM)",
                            description=EVENING_DESCRIPTION, start="16:00", end="06:00"),
        ShiftPresetResponse(id="weekday_evening_4pm_8am", label="Weekday Evening Shift (4 PM - 8 AM)",
                            description=EVENING_DESCRIPTION, start="16:00", end="08:00"),
        ShiftPresetResponse(id="weekday_evening_6pm_6am", label="Weekday Evening Shift (6 PM - 6 AM)",
                            description=EVENING_DESCRIPTION, start="18:00", end="06:00"),
        ShiftPresetResponse(id="weekday_evening_6pm_8am", label="Weekday Evening Shift (6 PM - 8 AM)",
                            description=EVENING_DESCRIPTION, start="18:00", end="08:00"),
    ]
}


def describe_definition(definition: CustomShiftDefinition) -> str:
    return (
        f"{format_weekdays(definition.days)} "
        f"{format_time_of_day(definition.start_time)}-{format_time_of_day(definition.end_time)}"
    )


def coverage_definitions(
    weekday_coverage: WeekdayCoverage,
    weekend_coverage: WeekendCoverage,
) -> List[CustomShiftDefinition]:
    """Expand care plan coverage choices into custom definitions."""
    definitions = []
    if weekday_coverage != WeekdayCoverage.NONE:
        start, end = WEEKDAY_COVERAGE_WINDOWS[weekday_coverage]
        definitions.append(CustomShiftDefinition(
            days=[d.value for d in WEEKDAYS], start_time=start, end_time=end,
        ))
    if weekend_coverage == WeekendCoverage.YES:
        start, end = WEEKEND_COVERAGE_WINDOW
        definitions.append(CustomShiftDefinition(
            days=[d.value for d in WEEKEND], start_time=start, end_time=end,
        ))
    return definitions


class ShiftGenerationService:
    """
    Expands coverage templates into concrete open shifts.

    Each shift is committed on its own. A storage failure on one item is
    logged and reported in the result, and the rest of the batch carries on.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.plan_service = CarePlanService(session)
        self.team_service = CareTeamService(session)

    async def _persist_shift(self, shift: CareShift) -> CareShift:
        self.session.add(shift)
        await self.session.commit()
        await self.session.refresh(shift)
        return shift

    async def _persist_batch(self, items: List[tuple]) -> ShiftGenerationResult:
        """items: (definition payload for reporting, CareShift to insert)"""
        created: List[ShiftResponse] = []
        skipped: List[SkippedDefinition] = []

        for payload, shift in items:
            try:
                shift = await self._persist_shift(shift)
                created.append(ShiftResponse.model_validate(shift))
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(f"Error creating generated shift '{shift.title}': {e}")
                skipped.append(SkippedDefinition(definition=payload, error=f"Storage error: {e.__class__.__name__}"))

        logger.info(f"Shift generation finished: {len(created)} created, {len(skipped)} skipped")
        return ShiftGenerationResult(
            total_requested=len(items),
            succeeded=len(created),
            skipped=skipped,
            shifts=created,
        )

    async def generate_from_custom_definitions(
        self,
        care_plan_id: int,
        family_id: int,
        definitions: List[CustomShiftDefinition],
        today: Optional[date] = None,
    ) -> ShiftGenerationResult:
        """One shift per definition, on the next date matching its weekdays."""
        await self.plan_service.get_plan(care_plan_id)

        # Resolve every definition before writing so bad input never leaves a partial batch
        items = []
        for definition in definitions or []:
            day = next_occurrence(definition.days, today=today)
            start, end = resolve_shift_window(day, definition.start_time, definition.end_time)
            schedule = describe_definition(definition)

            shift = CareShift(
                care_plan_id=care_plan_id,
                family_id=family_id,
                title=definition.title or f"Custom: {schedule}",
                description=f"Custom shift: {schedule}",
                status=ShiftStatus.OPEN,
                start_time=start,
                end_time=end,
                recurring_pattern=",".join(definition.days),
            )
            items.append((definition.dict(), shift))

        return await self._persist_batch(items)

    async def generate_from_schedule_text(
        self,
        care_plan_id: int,
        family_id: int,
        schedule_text: str,
        today: Optional[date] = None,
    ) -> ShiftGenerationResult:
        definitions = [CustomShiftDefinition(**d) for d in parse_custom_schedule_text(schedule_text)]
        return await self.generate_from_custom_definitions(care_plan_id, family_id, definitions, today=today)

    async def generate_from_coverage(
        self,
        care_plan_id: int,
        family_id: int,
        weekday_coverage: WeekdayCoverage = WeekdayCoverage.NONE,
        weekend_coverage: WeekendCoverage = WeekendCoverage.NO,
        today: Optional[date] = None,
    ) -> ShiftGenerationResult:
        definitions = coverage_definitions(weekday_coverage, weekend_coverage)
        return await self.generate_from_custom_definitions(care_plan_id, family_id, definitions, today=today)

    def get_presets(self) -> List[ShiftPresetResponse]:
        return list(SHIFT_PRESETS.values())

    async def generate_preset_range(
        self,
        care_plan_id: int,
        family_id: int,
        preset_id: str,
        from_date: date,
        to_date: date,
        caregiver_id: Optional[int] = None,
        location: Optional[str] = None,
    ) -> ShiftGenerationResult:
        """One shift per calendar day in [from_date, to_date] using a standard preset."""
        preset = SHIFT_PRESETS.get(preset_id)
        if not preset:
            raise NotFoundError(f"Shift preset '{preset_id}' not found")
        if to_date < from_date:
            raise ValidationError("to_date must be on or after from_date")

        total_days = (to_date - from_date).days + 1
        if total_days > settings.MAX_GENERATION_DAYS:
            raise ValidationError(
                f"Cannot generate more than {settings.MAX_GENERATION_DAYS} days of shifts at once"
            )

        await self.plan_service.get_plan(care_plan_id)
        if caregiver_id is not None:
            await self.team_service.require_active_member(care_plan_id, caregiver_id)

        items = []
        for offset in range(total_days):
            day = from_date + timedelta(days=offset)
            start, end = resolve_shift_window(day, preset.start, preset.end)
            shift = CareShift(
                care_plan_id=care_plan_id,
                family_id=family_id,
                caregiver_id=caregiver_id,
                title=preset.label,
                description=preset.description,
                location=location or settings.DEFAULT_SHIFT_LOCATION,
                status=derive_shift_status(caregiver_id),
                start_time=start,
                end_time=end,
            )
            items.append(({"preset_id": preset_id, "date": day.isoformat()}, shift))

        return await self._persist_batch(items)
