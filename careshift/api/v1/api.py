from fastapi import APIRouter
from careshift.api.v1.endpoints.care import expenses, holidays, payroll, plans, shifts, team_members, work_logs

api_router = APIRouter()

# Care plan collaborators
api_router.include_router(plans.router, prefix="/care/plans", tags=["Care Plans"])
api_router.include_router(team_members.router, prefix="/care/team-members", tags=["Care Team"])

# Scheduling
api_router.include_router(shifts.router, prefix="/care/shifts", tags=["Shifts"])

# Work tracking and payroll
api_router.include_router(work_logs.router, prefix="/care/work-logs", tags=["Work Logs"])
api_router.include_router(expenses.router, prefix="/care/expenses", tags=["Expenses"])
api_router.include_router(payroll.router, prefix="/care/payroll", tags=["Payroll"])
api_router.include_router(holidays.router, prefix="/care/holidays", tags=["Holidays"])
