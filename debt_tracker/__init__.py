"""
Debt Tracker

A personal debt organizer: record card, bill and loan debts, see what is
still open and what falls due next, and keep a JSON backup.

DESIGN PRINCIPLES:
1. One owned store, persisted as a single JSON blob
2. Views are derived on demand, never stored
3. Destructive actions need an explicit confirmation
4. A full card number is never stored
"""

__version__ = "1.0.0"
__author__ = "Debt Tracker Team"
