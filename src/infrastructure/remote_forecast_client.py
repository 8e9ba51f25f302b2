"""HTTPS callable client for the remotely computed forecast.

The remote function follows the callable protocol: the request body is
``{"data": {...}}``, a success body is ``{"result": {...}}`` and a failure body
is ``{"error": {"status": "INTERNAL", "message": ...}}``. Calls need the
caller's identity token. There is no retry.
"""

from datetime import date

import requests

from src.application.ports.remote_forecast import (
    RemoteForecastError,
    RemoteForecastPort,
)
from src.domain.models import DailyForecastRow
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal


_ROW_FIELDS = ("income", "expenses", "netChange", "balance")
_ROW_KEYS = frozenset(("date", *_ROW_FIELDS))


class HttpsCallableForecastClient(RemoteForecastPort):
    """RemoteForecastPort implementation using ``requests``."""

    def __init__(
        self,
        function_url: str,
        id_token: str | None,
        timeout_seconds: float = 30.0,
        session: requests.Session | None = None,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            function_url: URL of the forecast callable.
            id_token: Identity token of the signed-in user.
            timeout_seconds: Request timeout.
            session: Optional session, mainly for tests.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._function_url = function_url
        self._id_token = id_token
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._logger = logger or get_app_logger()

    def fetch_forecast(self, days: int) -> list[DailyForecastRow]:
        if not self._id_token:
            raise RemoteForecastError(
                "unauthenticated",
                "You must be logged in to generate a forecast.",
            )
        try:
            response = self._session.post(
                self._function_url,
                json={"data": {"daysToForecast": days}},
                headers={
                    "Authorization": f"Bearer {self._id_token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self._timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            self._logger.error(f"Forecast request failed: {exc}")
            raise RemoteForecastError(
                "internal",
                f"Failed to reach forecast service: {exc}",
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteForecastError(
                "internal",
                f"Forecast service returned invalid JSON "
                f"(HTTP {response.status_code})",
            ) from exc

        if not isinstance(payload, dict):
            raise RemoteForecastError(
                "internal",
                "Forecast service returned an unexpected payload",
            )
        if response.status_code >= 400 or "error" in payload:
            raise self._error_from_payload(payload, response.status_code)

        result = payload.get("result")
        forecast = result.get("forecast") if isinstance(result, dict) else None
        if not isinstance(forecast, list):
            raise RemoteForecastError(
                "internal",
                "Forecast service response has no forecast list",
            )
        rows = [self._parse_row(item) for item in forecast]
        self._logger.info(f"Remote forecast parsed: {len(rows)} rows")
        return rows

    def _error_from_payload(
        self,
        payload: dict,
        status_code: int,
    ) -> RemoteForecastError:
        error = payload.get("error")
        if not isinstance(error, dict):
            error = {}
        code = str(error.get("status") or "INTERNAL").lower()
        message = error.get("message") or f"HTTP {status_code}"
        details = error.get("details")
        if details:
            message = f"{message}: {details}"
        self._logger.error(f"Forecast service error ({code}): {message}")
        return RemoteForecastError(code, message)

    @staticmethod
    def _parse_row(item) -> DailyForecastRow:
        """Parse one remote row, rejecting incomplete rows.

        Args:
            item: Raw row with date, income, expenses, netChange and balance.

        Returns:
            DailyForecastRow: Parsed row.

        Raises:
            RemoteForecastError: If the row has missing or unexpected fields,
                or a value is not numeric.
        """
        if not isinstance(item, dict) or not item.get("date"):
            raise RemoteForecastError("internal", f"Malformed row: {item!r}")
        keys = set(item)
        if keys != _ROW_KEYS:
            missing = sorted(_ROW_KEYS - keys)
            extra = sorted(keys - _ROW_KEYS)
            raise RemoteForecastError(
                "internal",
                f"Unexpected row fields for {item['date']}: "
                f"missing={missing}, extra={extra}",
            )
        try:
            day = date.fromisoformat(str(item["date"])[:10])
        except ValueError as exc:
            raise RemoteForecastError(
                "internal",
                f"Malformed row date: {item['date']!r}",
            ) from exc
        values = {field: parse_decimal(item.get(field)) for field in _ROW_FIELDS}
        unreadable = [field for field, value in values.items() if value is None]
        if unreadable:
            raise RemoteForecastError(
                "internal",
                f"Malformed row for {day}: unreadable {', '.join(unreadable)}",
            )
        return DailyForecastRow(
            date=day,
            income=values["income"],
            expenses=values["expenses"],
            net_change=values["netChange"],
            balance=values["balance"],
        )


__all__ = ["HttpsCallableForecastClient"]
