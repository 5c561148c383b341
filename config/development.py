import os

from config.payroll import (  # noqa: F401
    ANCHOR_CURRENCY,
    ANNUAL_LEAVE_ENTITLEMENT,
    ATTENDANCE_BASIS,
    CATEGORY_ENTITLEMENTS,
    COMPANY,
    DEFAULT_WORKING_DAYS,
    LEAVE_ATTRIBUTION,
    LOCAL_CURRENCY,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "payroll_db"),
}

DEBUG = True
