import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "storeops"),
}

REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "Asia/Tokyo")
NAME_CACHE_TTL_SECONDS = int(os.getenv("NAME_CACHE_TTL_SECONDS", str(24 * 60 * 60)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
