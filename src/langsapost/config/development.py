import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "langsapost"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed default components and the admin account on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@langsapost.test")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Password123!")

PAYROLL_STORAGE_DIR = os.getenv("PAYROLL_STORAGE_DIR", "uploads/payroll")
PAYROLL_TAX_RATE = os.getenv("PAYROLL_TAX_RATE", "0.05")
PAYROLL_RUN_DAY = int(os.getenv("PAYROLL_RUN_DAY", "25"))
PAYROLL_RUN_HOUR = int(os.getenv("PAYROLL_RUN_HOUR", "9"))

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
