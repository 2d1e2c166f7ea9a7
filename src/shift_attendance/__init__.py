"""Shift Attendance package.

Organized by feature modules (employees, shifts, attendance, leaves, reports)
with a thin Flask controller layer over service and repository layers.
"""

__version__ = "0.1.0"
