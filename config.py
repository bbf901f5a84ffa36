import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # Postgres in production; SQLite file inside the repo for local dev
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "gymslot.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Header carrying the identity provider's user id
    AUTH_HEADER_NAME = os.getenv("AUTH_HEADER_NAME", "X-Clerk-User-Id")

    # Slot dates/times are wall-clock times at the gym
    GYM_TIMEZONE = os.getenv("GYM_TIMEZONE", "Europe/Athens")

    # Transient database errors
    DB_RETRY_ATTEMPTS = int(os.getenv("DB_RETRY_ATTEMPTS", "3"))
    DB_RETRY_DELAY_SECONDS = float(os.getenv("DB_RETRY_DELAY_SECONDS", "1.0"))

    # Reject out-of-hours slots at booking time (listing always filters them)
    ENFORCE_SLOT_HOURS_ON_BOOKING = os.getenv("ENFORCE_SLOT_HOURS_ON_BOOKING", "false").lower() == "true"

    USER_BOOKINGS_DEFAULT_LIMIT = 50
    ADMIN_LIST_LIMIT = 200

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    DB_RETRY_DELAY_SECONDS = 0
    LOG_LEVEL = "WARNING"
