"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
DASHBOARD_WORKERS = 3
