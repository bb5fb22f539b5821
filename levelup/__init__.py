"""Level Up: gamified habit tracking (levels, due-today scheduling, streaks)"""

__version__ = "0.1.0"
