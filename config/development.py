import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# rest | mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

# Hosted backend (rest). Never commit these values: use the environment or .env.
STORE_URL = os.getenv("STORE_URL", "")
STORE_SERVICE_KEY = os.getenv("STORE_SERVICE_KEY", "")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

# Password given to every seeded demo account; random per account when empty.
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled (mysql backend), the app applies database/schema.sql on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
