"""
Finance Tracker - Source Package

A personal ledger of dated income and expense records, kept in memory
and persisted to a flat '|'-separated text file.

DESIGN PRINCIPLES:
1. The ledger owns its records; nothing else holds references
2. Fail early, fail visibly (typed errors, never a process exit)
3. Bad lines in the data file are skipped, never fatal
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
