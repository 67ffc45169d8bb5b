import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _float_env(name, default):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    # ERP backend origin, every store talks to this
    BACKEND_BASE_URL = os.getenv("BACKEND_BASE_URL", "http://localhost:8000")

    # None keeps the requests default (no deadline)
    API_TIMEOUT = _float_env("API_TIMEOUT", None)

    # Razorpay public key for the checkout overlay
    RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID", "")

    # Post-payment refresh: wait, then poll history until the payment shows up
    PAYMENT_REFRESH_DELAY = _float_env("PAYMENT_REFRESH_DELAY", 1.0)
    PAYMENT_REFRESH_TIMEOUT = _float_env("PAYMENT_REFRESH_TIMEOUT", 10.0)
    PAYMENT_POLL_INTERVAL = _float_env("PAYMENT_POLL_INTERVAL", 1.0)

    EXAM_SESSION = os.getenv("EXAM_SESSION", "2025-2026")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", os.path.join(BASE_DIR, "..", "portal.log"))

    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max upload


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    BACKEND_BASE_URL = "http://backend.test"
    RAZORPAY_KEY_ID = "rzp_test_key"
    PAYMENT_REFRESH_DELAY = 0
    PAYMENT_REFRESH_TIMEOUT = 0
    PAYMENT_POLL_INTERVAL = 0
    LOG_FILE = None
