"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

QUARTER_HOUR = 0.25
NIGHT_SHIFT_START_HOUR = 18
NIGHT_SHIFT_END_HOUR = 6

DEFAULT_REPORT_TIMEZONE = "Asia/Tokyo"
DEFAULT_NAME_CACHE_TTL_SECONDS = 24 * 60 * 60
NAME_LOOKUP_CHUNK_SIZE = 200

IN_PROGRESS_LABEL = "勤務中"
COMMON_ATTRIBUTION_LABEL = "共通"

# Sales recorded up to this many hours either side of a month can carry a
# business date inside it.
BUSINESS_DAY_FETCH_PADDING_HOURS = 12
