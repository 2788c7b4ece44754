"""Time-and-attendance reconciliation engine.

This package is organized by feature modules (shifts, schedules, rounding,
matching, payroll, attendance_exceptions, reconciliation) with a thin Flask
controller layer over service/repository layers.
"""
