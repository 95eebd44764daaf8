import os

_MODULE_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    # SETTINGS_MODULE wins; otherwise APP_ENV picks one (development by default).
    explicit = os.getenv("SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _MODULE_BY_ENV.get(env, "config.development")
