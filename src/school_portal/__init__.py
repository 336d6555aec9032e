"""School portal package.

Organized by feature modules (users, students, leaves, exams, ...) with a thin
Flask controller layer on top of service/repository layers and a small set of
pure functions that keep attendance, leave and access state consistent.
"""
