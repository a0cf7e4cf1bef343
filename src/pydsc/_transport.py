"""JSON-over-HTTP transport for the REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, NoReturn, Protocol

import aiohttp

from pydsc._redact import redact_for_log
from pydsc.config import DscConfig
from pydsc.exceptions import DscApiError, DscNotFoundError, DscTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the store and messenger.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RestTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Mapping[str, Any] | None = None,
    ) -> Any: ...


class RestTransport:
    """Send JSON requests to the REST API and decode JSON replies."""

    def __init__(self, config: DscConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        headers.update(self._config.headers)
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send *method* to *endpoint* and return the decoded JSON body.

        ``204 No Content`` yields ``None``. Error bodies become
        :class:`DscApiError` (or :class:`DscNotFoundError` for 404); any
        other failure becomes :class:`DscTransportError`.
        """
        url = f"{self._config.api_url}{endpoint}"
        headers = self._headers()
        _logger.debug("%s %s headers=%s body=%s", method, url, redact_for_log(headers), redact_for_log(json))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(json) if json is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise DscTransportError(f"{method} {endpoint} failed: {exc}", endpoint=endpoint) from exc
        except TimeoutError as exc:
            raise DscTransportError(f"{method} {endpoint} timed out", endpoint=endpoint) from exc

        _logger.debug("%s %s -> HTTP %d", method, endpoint, status)

        if status == 204 or (200 <= status < 300 and not text.strip()):
            return None

        body = _decode_json(text, endpoint=endpoint, status=status)

        if 200 <= status < 300:
            return body

        _raise_for_status(endpoint=endpoint, status=status, body=body, text=text)


def _decode_json(text: str, *, endpoint: str, status: int) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DscTransportError(
            f"HTTP {status} from {endpoint} is not JSON: {text[:200]}",
            status_code=status,
            endpoint=endpoint,
        ) from exc


def _raise_for_status(*, endpoint: str, status: int, body: Any, text: str) -> NoReturn:
    if not isinstance(body, dict) or "message" not in body:
        raise DscTransportError(
            f"HTTP {status} from {endpoint}: {text[:200]}",
            status_code=status,
            endpoint=endpoint,
        )
    code = body.get("code", "")
    message = str(body.get("message", ""))
    error_cls = DscNotFoundError if status == 404 else DscApiError
    raise error_cls(
        f"{endpoint} failed: HTTP {status} code={code} message={message}",
        code=code,
        status_code=status,
        endpoint=endpoint,
    )
