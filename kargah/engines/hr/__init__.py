"""
Kargah HR Engine
==================
Employees, work logs, salary payments and period payroll.
"""

from kargah.engines.hr.payroll import (
    SalaryBreakdown,
    SalaryStatement,
    compute_salary,
    salary_statement,
)
from kargah.engines.hr.services import HRService

__all__ = [
    "SalaryBreakdown",
    "SalaryStatement",
    "compute_salary",
    "salary_statement",
    "HRService",
]
