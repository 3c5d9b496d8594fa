"""Classroom Attendance package.

Teachers keep a roster of students, record per-subject daily attendance and
export spreadsheet reports. Organized by feature modules (users, students,
attendance, reports, dashboard) with a thin Flask controller layer on top of
service/repository layers.
"""
