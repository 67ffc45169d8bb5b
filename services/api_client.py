import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed call to the ERP backend.

    ``message`` comes from the response body when the backend sent one and is
    ``None`` otherwise (transport failures, empty bodies). Stores substitute
    their own generic message in that case.
    """

    def __init__(self, message=None, status_code=None, payload=None):
        super().__init__(message or f"Backend request failed ({status_code})")
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def not_found(self):
        return self.status_code == 404


def is_success(body):
    # Payment endpoints answer with "success", everything else with "status"
    if not isinstance(body, dict):
        return False
    if "status" in body:
        return bool(body["status"])
    return bool(body.get("success"))


class ApiClient:
    """Thin wrapper around a requests session pointed at the backend origin.

    The backend authenticates with cookies, so the session's cookie jar is
    what carries the student's identity. ``cookies`` seeds the jar and
    ``export_cookies`` hands it back for storage between browser requests.
    """

    def __init__(self, base_url, cookies=None, timeout=None, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")
        if cookies:
            self.session.cookies.update(cookies)

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method, path, json=None, data=None, files=None, params=None):
        url = self.url_for(path)
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(None, None) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if not response.ok:
            logger.info("%s %s -> %s", method, path, response.status_code)
            raise ApiError(body.get("message"), response.status_code, body)

        return body

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, json=None, data=None, files=None):
        return self.request("POST", path, json=json, data=data, files=files)

    def put(self, path, json=None, data=None, files=None):
        return self.request("PUT", path, json=json, data=data, files=files)

    def export_cookies(self):
        return requests.utils.dict_from_cookiejar(self.session.cookies)

    def clear_cookies(self):
        self.session.cookies.clear()
