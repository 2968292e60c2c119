"""API routers, one per resource."""

from . import dashboard, reports, projects, students, time_entries, invoices

__all__ = ["dashboard", "reports", "projects", "students", "time_entries", "invoices"]
