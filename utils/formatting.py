from datetime import datetime

from jinja2 import Undefined


def currency(amount):
    """Indian-rupee display with thousands separators."""
    if amount is None or amount == "" or isinstance(amount, Undefined):
        return "--"
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return str(amount)
    if value.is_integer():
        return f"₹{int(value):,}"
    return f"₹{value:,.2f}"


def date_only(value):
    if not value:
        return "--"
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%d %b %Y")
    except ValueError:
        return str(value)


def status_class(status):
    return {
        "paid": "success",
        "approved": "success",
        "pending": "warning",
        "requested": "warning",
        "partial": "warning",
        "overdue": "danger",
        "not_paid": "danger",
        "rejected": "danger",
        "failed": "danger",
        "submitted": "info",
        "verified": "success",
        "hall_ticket_available": "success",
    }.get(str(status or "").lower(), "secondary")


def attendance_class(percentage):
    if percentage >= 75:
        return "success"
    if percentage >= 60:
        return "warning"
    return "danger"


def register_filters(app):
    app.jinja_env.filters["currency"] = currency
    app.jinja_env.filters["date_only"] = date_only
    app.jinja_env.filters["status_class"] = status_class
    app.jinja_env.filters["attendance_class"] = attendance_class
