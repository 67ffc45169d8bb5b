import logging
import time

from flask import current_app

logger = logging.getLogger(__name__)

CONTACT_SUPPORT_MESSAGE = (
    "We could not confirm your payment. If money was deducted from your account, "
    "please contact support with your payment id before trying again."
)


def checkout_prefill(user):
    profile = getattr(user, "profile", None) or {}
    return {
        "name": profile.get("name") or "",
        "email": profile.get("email") or "",
        "contact": profile.get("phone") or "",
    }


def checkout_options(order, name, description, user=None):
    return order.to_checkout(
        key=current_app.config["RAZORPAY_KEY_ID"],
        name=name,
        description=description,
        prefill=checkout_prefill(user),
    )


def refresh_until_reflected(refresh, is_reflected, delay=None, timeout=None, interval=None, sleep=time.sleep):
    """Refetch after a verified payment until the backend shows it.

    The backend can lag behind its own verification response, so one refetch
    right away may still show the fee as unpaid. ``refresh`` is called at
    least once; polling stops when ``is_reflected()`` is true or ``timeout``
    seconds have passed. Returns whether the payment was seen.
    """
    config = current_app.config
    delay = config["PAYMENT_REFRESH_DELAY"] if delay is None else delay
    timeout = config["PAYMENT_REFRESH_TIMEOUT"] if timeout is None else timeout
    interval = config["PAYMENT_POLL_INTERVAL"] if interval is None else interval

    if delay:
        sleep(delay)
    deadline = time.monotonic() + (timeout or 0)
    while True:
        refresh()
        if is_reflected():
            return True
        if time.monotonic() >= deadline:
            logger.warning("payment not reflected after %ss", timeout)
            return False
        sleep(interval or 0.5)
