import os

# APP_ENV value -> settings module; anything else runs with development settings.
_ENV_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENV_MODULES.get(env, "config.development")
