from careshift.models.care.care_plan import CarePlan
from careshift.models.care.care_team_member import CareTeamMember
from careshift.models.care.care_shift import CareShift
from careshift.models.care.work_log import WorkLog
from careshift.models.care.work_log_expense import WorkLogExpense
from careshift.models.care.holiday import Holiday
from careshift.models.care.payroll_entry import PayrollEntry
