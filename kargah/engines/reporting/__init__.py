"""
Kargah Reporting Engine
=========================
Read-side aggregates: period financial report, product profitability,
salary reports, monthly revenue, dashboard and customer statements.
Nothing here writes to the store.
"""

from kargah.engines.reporting.dashboard import (
    CustomerStatement,
    DashboardSummary,
    customer_statement,
    dashboard_summary,
    monthly_revenue,
)
from kargah.engines.reporting.ledger import (
    FinancialReport,
    ProductProfitability,
    SalaryReport,
    get_filtered_report,
    product_profitability,
    salary_reports,
)

__all__ = [
    "CustomerStatement",
    "DashboardSummary",
    "customer_statement",
    "dashboard_summary",
    "monthly_revenue",
    "FinancialReport",
    "ProductProfitability",
    "SalaryReport",
    "get_filtered_report",
    "product_profitability",
    "salary_reports",
]
