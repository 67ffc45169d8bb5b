from functools import wraps
from flask import redirect, url_for, request
from flask_login import current_user


def student_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        # The user loader re-ran the backend auth check for this request;
        # an expired backend session shows up here as anonymous
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login", next=request.path))
        return func(*args, **kwargs)
    return wrapper
