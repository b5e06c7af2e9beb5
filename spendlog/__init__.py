"""
spendlog - Source Package

A small personal finance ledger: record transactions into a JSON file
and summarize spending per category.

DESIGN PRINCIPLES:
1. Money is summed in integer cents, never floats
2. Fail early, fail visibly
3. No silent corrections (categories are matched exactly as typed)
4. Every step is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "spendlog Team"
