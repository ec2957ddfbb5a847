import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

STORE_URL = ""
STORE_SERVICE_KEY = ""
REQUEST_TIMEOUT = 5.0

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEMO_PASSWORD = "test-password"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
