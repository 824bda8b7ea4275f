import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "langsapost_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ADMIN_EMAIL = "admin@langsapost.test"
ADMIN_PASSWORD = "Password123!"

PAYROLL_STORAGE_DIR = os.getenv("PAYROLL_STORAGE_DIR", "/tmp/langsapost-test/payroll")
PAYROLL_TAX_RATE = "0.05"
PAYROLL_RUN_DAY = 25
PAYROLL_RUN_HOUR = 9

CELERY_BROKER_URL = "memory://"
