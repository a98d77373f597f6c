import json
import logging
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from errors import PersistRejected, TransportError

logger = logging.getLogger(__name__)


def _error_body(err: HTTPError) -> str:
    try:
        return err.read().decode("utf-8", errors="replace")
    except (OSError, AttributeError):
        return ""


class RemoteTableStore:
    """JSON-over-HTTP client for the table fetch and persist endpoints."""

    def __init__(self, fetch_url: str, persist_url: str, timeout: float = 10.0):
        self.fetch_url = fetch_url
        self.persist_url = persist_url
        self.timeout = timeout

    def _post(self, url: str, body: str) -> str:
        try:
            request = Request(
                url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                method="POST",
            )
            with urlopen(request, timeout=self.timeout) as resp:
                return resp.read().decode("utf-8", errors="replace")
        except (ValueError, HTTPException) as e:
            # bad URL or a broken HTTP exchange
            raise TransportError(f"request to {url} failed: {e}") from e

    def fetch_table(self, table_name: str) -> list[dict]:
        body = json.dumps({"table": table_name})
        try:
            text = self._post(self.fetch_url, body)
        except HTTPError as e:
            raise TransportError(f"fetch of '{table_name}' failed: HTTP {e.code}") from e
        except (URLError, TimeoutError, ConnectionError) as e:
            raise TransportError(f"fetch of '{table_name}' failed: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(f"malformed response for '{table_name}': not JSON") from e
        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise TransportError(f"malformed response for '{table_name}': expected a list of rows")
        logger.debug("fetched %d rows for %s", len(data), table_name)
        return data

    def persist_table(self, table_name: str, rows, columns_to_delete):
        request_body = json.dumps(
            {
                "table": table_name,
                "data": list(rows),
                "columnsToDelete": list(columns_to_delete),
            },
            ensure_ascii=False,
        )
        try:
            text = self._post(self.persist_url, request_body)
        except HTTPError as e:
            raise PersistRejected(
                f"update of '{table_name}' rejected: HTTP {e.code}",
                status=e.code,
                request_body=request_body,
                response_body=_error_body(e),
            ) from e
        except (URLError, TimeoutError, ConnectionError) as e:
            raise TransportError(f"update of '{table_name}' failed: {e}") from e

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(f"malformed update response for '{table_name}'") from e
