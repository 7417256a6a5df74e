"""
Kargah HR Engine — Event Types
================================
"""

from __future__ import annotations

HR_EMPLOYEE_ADDED_V1 = "hr.employee.added.v1"
HR_EMPLOYEE_EDITED_V1 = "hr.employee.edited.v1"
HR_EMPLOYEE_DELETED_V1 = "hr.employee.deleted.v1"
HR_WORK_LOG_ADDED_V1 = "hr.worklog.added.v1"
HR_WORK_LOG_EDITED_V1 = "hr.worklog.edited.v1"
HR_WORK_LOG_DELETED_V1 = "hr.worklog.deleted.v1"
HR_SALARY_PAID_V1 = "hr.salary.paid.v1"

HR_EVENT_TYPES = (
    HR_EMPLOYEE_ADDED_V1,
    HR_EMPLOYEE_EDITED_V1,
    HR_EMPLOYEE_DELETED_V1,
    HR_WORK_LOG_ADDED_V1,
    HR_WORK_LOG_EDITED_V1,
    HR_WORK_LOG_DELETED_V1,
    HR_SALARY_PAID_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "hr.employee.add.request": HR_EMPLOYEE_ADDED_V1,
    "hr.employee.edit.request": HR_EMPLOYEE_EDITED_V1,
    "hr.employee.delete.request": HR_EMPLOYEE_DELETED_V1,
    "hr.worklog.add.request": HR_WORK_LOG_ADDED_V1,
    "hr.worklog.edit.request": HR_WORK_LOG_EDITED_V1,
    "hr.worklog.delete.request": HR_WORK_LOG_DELETED_V1,
    "hr.salary.pay.request": HR_SALARY_PAID_V1,
}


def resolve_hr_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
