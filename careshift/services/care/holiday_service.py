import logging
from typing import Any, Dict, Optional
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date, timedelta

from careshift.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from careshift.models.care.holiday import Holiday
from careshift.schemas.care.holiday_schema import HolidayCreate, HolidayUpdate

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _active_holiday_on(self, day: date, exclude_id: Optional[int] = None) -> Optional[Holiday]:
        conditions = [Holiday.date == day, Holiday.is_active == True]
        if exclude_id is not None:
            conditions.append(Holiday.id != exclude_id)
        result = await self.session.execute(select(Holiday).where(*conditions))
        return result.scalars().first()

    async def create_holiday(self, holiday_data: HolidayCreate) -> Holiday:
        """Create a new holiday"""
        if await self._active_holiday_on(holiday_data.date):
            raise ConflictError(f"Holiday already exists for {holiday_data.date}")

        try:
            holiday = Holiday(**holiday_data.dict(), is_active=True)
            self.session.add(holiday)
            await self.session.commit()
            await self.session.refresh(holiday)

            logger.info(f"Holiday created: {holiday.name} on {holiday.date} (x{holiday.pay_multiplier})")
            return holiday

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error creating holiday: {e}")
            raise StorageError()

    async def get_holidays(
        self,
        page_index: int = 1,
        page_size: int = 100,
        year: Optional[int] = None,
        month: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Retrieve holidays with pagination and optional filters. A month filter needs a year."""
        if month and not year:
            raise ValidationError("month filter requires a year")

        conditions = []

        if is_active is not None:
            conditions.append(Holiday.is_active == is_active)

        if year and month:
            start_date = date(year, month, 1)
            if month == 12:
                end_date = date(year, 12, 31)
            else:
                end_date = date(year, month + 1, 1) - timedelta(days=1)
            conditions.append(Holiday.date >= start_date)
            conditions.append(Holiday.date <= end_date)
        elif year:
            conditions.append(Holiday.date >= date(year, 1, 1))
            conditions.append(Holiday.date <= date(year, 12, 31))

        total_count = await self.session.scalar(
            select(func.count(Holiday.id)).where(*conditions)
        )

        skip = (page_index - 1) * page_size
        holidays = await self.session.scalars(
            select(Holiday)
            .where(*conditions)
            .order_by(Holiday.date.desc())
            .offset(skip)
            .limit(page_size)
        )

        return {
            "page_index": page_index,
            "page_size": page_size,
            "count": total_count or 0,
            "data": holidays.all()
        }

    async def get_holiday(self, holiday_id: int) -> Holiday:
        result = await self.session.execute(select(Holiday).where(Holiday.id == holiday_id))
        holiday = result.scalar_one_or_none()
        if not holiday:
            raise NotFoundError(f"Holiday with ID {holiday_id} not found")
        return holiday

    async def get_holiday_for_date(self, day: date) -> Optional[Holiday]:
        """The active holiday on a calendar date, if any. Used by payroll."""
        return await self._active_holiday_on(day)

    async def update_holiday(self, holiday_id: int, holiday_data: HolidayUpdate) -> Holiday:
        holiday = await self.get_holiday(holiday_id)
        update_data = holiday_data.dict(exclude_unset=True)

        new_date = update_data.get("date", holiday.date)
        stays_active = update_data.get("is_active", holiday.is_active)
        if stays_active and await self._active_holiday_on(new_date, exclude_id=holiday_id):
            raise ConflictError(f"Holiday already exists for {new_date}")

        try:
            for field, value in update_data.items():
                setattr(holiday, field, value)

            await self.session.commit()
            await self.session.refresh(holiday)

            logger.info(f"Holiday updated: {holiday.name} on {holiday.date}")
            return holiday

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error updating holiday {holiday_id}: {e}")
            raise StorageError()

    async def delete_holiday(self, holiday_id: int) -> bool:
        """Soft delete a holiday"""
        holiday = await self.get_holiday(holiday_id)
        try:
            holiday.is_active = False
            await self.session.commit()
            logger.info(f"Holiday deleted: {holiday.name}")
            return True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting holiday {holiday_id}: {e}")
            raise StorageError()
