import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "brigade"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "brigade_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

COMP_DAY_THRESHOLD_HOURS = os.getenv("COMP_DAY_THRESHOLD_HOURS", "3.15")
VACATION_ANNUAL_QUOTA = int(os.getenv("VACATION_ANNUAL_QUOTA", "22"))
PERSONAL_ANNUAL_QUOTA = int(os.getenv("PERSONAL_ANNUAL_QUOTA", "7"))
