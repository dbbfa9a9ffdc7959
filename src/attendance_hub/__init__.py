"""Attendance Hub package.

Organized by feature modules (attendance, leaves, notifications, dashboard,
users) with a thin Flask controller layer over service/repository layers.
"""
