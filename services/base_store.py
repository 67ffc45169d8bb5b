import logging

from services.api_client import ApiError, is_success

logger = logging.getLogger(__name__)


class BaseStore:
    """Shared fetch/mutate plumbing for the per-domain containers.

    A container holds the last snapshot it fetched, an ``is_loading`` flag and
    an ``error`` string. Fetches swallow failures into ``error``; mutations
    record the error and re-raise so the calling view can react.
    """

    def __init__(self, client):
        self.client = client
        self.is_loading = False
        self.error = None

    def _get_data(self, path, failure_message, allow_not_found=False):
        """GET ``path`` and return the envelope's ``data``.

        With ``allow_not_found`` a 404 means "no record yet" and yields
        ``None``. Any other failure raises ApiError carrying a usable message.
        """
        try:
            body = self.client.get(path)
        except ApiError as exc:
            if allow_not_found and exc.not_found:
                return None
            raise ApiError(exc.message or failure_message, exc.status_code, exc.payload) from exc

        if not is_success(body):
            raise ApiError(body.get("message") or failure_message, 200, body)
        return body.get("data")

    def _send(self, method, path, failure_message, json=None, data=None, files=None):
        try:
            body = self.client.request(method, path, json=json, data=data, files=files)
        except ApiError as exc:
            message = exc.message or failure_message
            self.error = message
            logger.warning("%s %s failed: %s", method, path, message)
            raise ApiError(message, exc.status_code, exc.payload) from exc

        if not is_success(body):
            message = body.get("message") or failure_message
            self.error = message
            raise ApiError(message, 200, body)
        return body

    def clear_error(self):
        self.error = None
