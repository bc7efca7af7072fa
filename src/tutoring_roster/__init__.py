"""Tutoring Roster package.

Per-context student rosters and teaching-hour ledgers, organized by feature
modules (ledger, students, sessions, roster) with a thin Flask controller
layer over an in-memory repository.
"""
