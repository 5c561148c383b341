"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ANNUAL_LEAVE_ENTITLEMENT = 21
DEFAULT_WORKING_DAYS_PER_MONTH = 26
DEFAULT_LIST_LIMIT = 200

DEFAULT_CATEGORY_ENTITLEMENTS = {
    "casual": 12,
    "sick": 10,
    "earned": 21,
}

DEFAULT_ANCHOR_CURRENCY = "USD"
DEFAULT_LOCAL_CURRENCY = "ZWL"

# Rendered in place of a local-currency amount when no exchange rate is set.
UNAVAILABLE_MARKER = "N/A"

MAX_DAYS_WORKED = 31
