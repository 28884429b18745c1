"""
FinTrack - Source Package

A small personal-finance bookkeeping simulator: one user logs in by
name and email, checks a balance, sends and receives simulated money,
and reviews a short transaction history.

DESIGN PRINCIPLES:
1. Validate first, mutate second
2. Errors are values, not crashes
3. The balance never goes negative
4. Every operation is auditable
5. Nothing outlives the session
"""

__version__ = "1.0.0"
__author__ = "FinTrack Team"
