"""Timesheet engine package.

Organized by feature modules (rules, shifts, attendance, timesheets) with a thin
Flask controller layer over service/repository layers.
"""
