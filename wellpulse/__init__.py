"""
WellPulse backend package.

Design intent:
- Host the survey interpretation engine behind a small, I/O-free boundary.
- Keep domain modules (interpretation/internal_core) independent from delivery layers.
"""

__version__ = "0.1.0"
