"""
Personal Finance Dashboard - Source Package

A single-user dashboard for recording income and expenses against
accounts, reviewing them per reporting period, and tracking savings goals.

DESIGN PRINCIPLES:
1. State changes are pure functions: old state in, new state out
2. Reports are recomputed from state, never cached
3. Validation happens at the form boundary, before any mutation
4. Storage failures never take down the dashboard
5. The AI only sees aggregated figures, never raw records
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Dashboard Team"
