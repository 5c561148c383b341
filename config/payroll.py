"""Payroll engine keys shared by every environment."""

import os

ANNUAL_LEAVE_ENTITLEMENT = int(os.getenv("ANNUAL_LEAVE_ENTITLEMENT", "21"))

# Per-category yearly entitlements; unpaid leave has none
CATEGORY_ENTITLEMENTS = {
    "casual": 12,
    "sick": 10,
    "earned": 21,
}

DEFAULT_WORKING_DAYS = int(os.getenv("DEFAULT_WORKING_DAYS", "26"))

# full_span | clipped
LEAVE_ATTRIBUTION = os.getenv("LEAVE_ATTRIBUTION", "full_span")
# calendar | working
ATTENDANCE_BASIS = os.getenv("ATTENDANCE_BASIS", "calendar")

ANCHOR_CURRENCY = os.getenv("ANCHOR_CURRENCY", "USD")
LOCAL_CURRENCY = os.getenv("LOCAL_CURRENCY", "ZWL")

COMPANY = {
    "name": os.getenv("COMPANY_NAME", "Company"),
    "logo": os.getenv("COMPANY_LOGO"),
    "tagline": os.getenv("COMPANY_TAGLINE"),
}
