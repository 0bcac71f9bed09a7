import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "brigade_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo locations and one account per role
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Balance policy
COMP_DAY_THRESHOLD_HOURS = os.getenv("COMP_DAY_THRESHOLD_HOURS", "3.15")
VACATION_ANNUAL_QUOTA = int(os.getenv("VACATION_ANNUAL_QUOTA", "22"))
PERSONAL_ANNUAL_QUOTA = int(os.getenv("PERSONAL_ANNUAL_QUOTA", "7"))
