"""CareerPassport portal package.

This package is organized by feature modules (users, courses, attendance, ...)
with a thin Flask controller layer over service/repository layers. All data
lives in a remote script endpoint; repositories read and patch a per-user
in-memory cache that mirrors it.
"""
