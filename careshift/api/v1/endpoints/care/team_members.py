from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from careshift.core.database import get_async_session
from careshift.models.shared.enums import TeamMemberStatus
from careshift.services.care.care_team_service import CareTeamService
from careshift.schemas.care.team_member_schema import (
    CareTeamMemberCreate, CareTeamMemberUpdate, CareTeamMemberResponse
)

router = APIRouter()

@router.post("/", response_model=CareTeamMemberResponse, status_code=201)
async def add_team_member(
    member: CareTeamMemberCreate,
    session: AsyncSession = Depends(get_async_session)
):
    """Add a caregiver to a care plan's team"""
    service = CareTeamService(session)
    return await service.add_member(member)

@router.get("/", response_model=List[CareTeamMemberResponse])
async def get_team_members(
    care_plan_id: int = Query(...),
    status: Optional[TeamMemberStatus] = Query(None),
    session: AsyncSession = Depends(get_async_session)
):
    service = CareTeamService(session)
    return await service.get_members(care_plan_id, status)

@router.get("/{member_id}", response_model=CareTeamMemberResponse)
async def get_team_member(
    member_id: int,
    session: AsyncSession = Depends(get_async_session)
):
    service = CareTeamService(session)
    return await service.get_member(member_id)

@router.put("/{member_id}", response_model=CareTeamMemberResponse)
async def update_team_member(
    member_id: int,
    member: CareTeamMemberUpdate,
    session: AsyncSession = Depends(get_async_session)
):
    """Update rates, role or status"""
    service = CareTeamService(session)
    return await service.update_member(member_id, member)
