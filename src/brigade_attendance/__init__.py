"""Brigade attendance package.

Attendance, leave and overtime tracking for forestry firefighting crews,
organized by feature modules (balance, attendance, requests, users, ...)
with a thin Flask controller layer over service/repository layers.
"""
