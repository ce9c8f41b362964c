from enum import Enum


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

class ShiftStatus(str, Enum):
    OPEN = "open"
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class ShiftFilter(str, Enum):
    ALL = "all"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    COMPLETED = "completed"

class TeamMemberStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class WorkLogStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class ExpenseCategory(str, Enum):
    MEDICAL_SUPPLIES = "medical_supplies"
    FOOD = "food"
    TRANSPORTATION = "transportation"
    OTHER = "other"

class PaymentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"

# region Coverage Templates

class WeekdayCoverage(str, Enum):
    STANDARD = "8am-4pm"
    EXTENDED = "6am-6pm"
    NIGHT = "6pm-8am"
    NONE = "none"

class WeekendCoverage(str, Enum):
    YES = "yes"
    NO = "no"

# endregion
