"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Schedule matching
MATCH_WINDOW_MINUTES = 120
EXACT_MATCH_MINUTES = 5

# Exception thresholds
LATE_THRESHOLD_MINUTES = 5
LATE_CRITICAL_MINUTES = 15
EARLY_LEAVE_THRESHOLD_MINUTES = 5
EARLY_LEAVE_CRITICAL_MINUTES = 30
BREAK_TOLERANCE_MINUTES = 10
OVERTIME_WARNING_HOURS = 2
MISSED_PUNCH_HOURS = 12

DEFAULT_STANDARD_HOURS = 8.0

# Batch run
DEFAULT_BATCH_LIMIT = 500
DEFAULT_LOOKBACK_DAYS = 7
