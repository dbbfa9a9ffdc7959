import os


def get_settings_module() -> str:
    # Resolve settings from APP_ENV, defaulting to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendance_hub.config.production"

    if env in {"test", "testing"}:
        return "attendance_hub.config.testing"

    return "attendance_hub.config.development"
