"""Client for the DVSA MOT history trade API.

A lookup takes a UK registration number and returns a ``LookupSummary`` for
the most recent MOT test of the first vehicle upstream reports. Every failure
is raised as ``MotApiError``; ``try_lookup`` returns the same outcome as a
``LookupResult`` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Optional

import httpx
from pydantic import ValidationError

from mot_history.data_models import LookupSummary, is_valid_registration
from mot_history.errors import UPSTREAM_FAILURE_MESSAGE, ErrorKind, MotApiError, classify_status
from mot_history.selection import build_summary
from mot_service.logging_config import lookup_context, new_request_id
from mot_service.schemas import UpstreamErrorBody, VehicleList, VehicleRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://beta.check-mot.service.gov.uk"
MOT_TESTS_PATH = "/trade/vehicles/mot-tests"

ApiKeyProvider = Callable[[], Optional[str]]
ClientFactory = Callable[[], httpx.AsyncClient]


@dataclass
class LookupResult:
    registration_number: str
    summary: LookupSummary | None = None
    error: MotApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MotLookupClient:
    """Looks up the latest MOT test for a registration number.

    ``api_key_provider`` is read on every call so a rotated key is picked up
    without rebuilding the client. ``client_factory`` must return a fresh
    ``httpx.AsyncClient``; it is closed when the call finishes. ``app_version``
    tags every log record and defaults to the installed package version.
    """

    def __init__(
        self,
        api_key_provider: ApiKeyProvider,
        client_factory: ClientFactory | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        app_version: str | None = None,
    ) -> None:
        self.api_key_provider = api_key_provider
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.app_version = app_version
        self.client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds))

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{MOT_TESTS_PATH}"

    async def lookup(self, registration_number: str) -> LookupSummary:
        request_id = new_request_id()
        context = partial(lookup_context, request_id, str(registration_number), app_version=self.app_version)

        try:
            if not is_valid_registration(registration_number):
                logger.warning("Rejected registration number with invalid format", extra=context())
                raise MotApiError.invalid_input()

            api_key = (self.api_key_provider() or "").strip()
            if not api_key:
                logger.error("MOT API key is not configured.", extra=context())
                raise MotApiError.missing_api_key()

            vehicles = await self._fetch_vehicles(registration_number, api_key, context)
            if not vehicles:
                logger.warning("No vehicle data found for registration %s", registration_number, extra=context())
            elif not vehicles[0].mot_tests:
                logger.warning("No MOT tests found for registration %s", registration_number, extra=context())
            return build_summary(vehicles)
        except MotApiError as exc:
            logger.error(
                "MOT API error: %s - %s", exc.error_code, exc.message,
                extra=context(kind=exc.kind.value, status_code=exc.status_code, error_code=exc.error_code),
            )
            raise
        except httpx.TransportError as exc:
            logger.error("Network error during MOT API request: %s", exc, extra=context(kind=ErrorKind.NETWORK.value))
            raise MotApiError.network() from exc
        except (ValidationError, httpx.DecodingError) as exc:
            logger.error(
                "Error deserializing response from MOT API: %s", exc,
                extra=context(kind=ErrorKind.DESERIALIZATION.value),
            )
            raise MotApiError.deserialization() from exc
        except Exception as exc:
            logger.exception(
                "An unexpected error occurred while fetching MOT data.",
                extra=context(kind=ErrorKind.UNEXPECTED.value),
            )
            raise MotApiError.unexpected() from exc

    async def try_lookup(self, registration_number: str) -> LookupResult:
        try:
            summary = await self.lookup(registration_number)
        except MotApiError as exc:
            return LookupResult(registration_number=registration_number, error=exc)
        return LookupResult(registration_number=registration_number, summary=summary)

    async def _fetch_vehicles(
        self,
        registration_number: str,
        api_key: str,
        context: Callable[..., dict[str, Any]],
    ) -> list[VehicleRecord] | None:
        url = self.endpoint
        logger.info("Sending request to MOT API: %s", url, extra=context(url=url))
        async with self.client_factory() as client:
            resp = await client.get(
                url,
                params={"registration": registration_number},
                headers={"x-api-key": api_key, "Accept": "application/json"},
            )
        logger.info("Received response from MOT API: %s", resp.status_code, extra=context(status_code=resp.status_code))

        if not resp.is_success:
            raise self._error_from_response(resp)
        if not resp.content.strip():
            return None
        return VehicleList.validate_json(resp.content)

    @staticmethod
    def _error_from_response(resp: httpx.Response) -> MotApiError:
        body = _parse_error_body(resp.content)
        if body is None:
            return classify_status(resp.status_code)
        return MotApiError(
            body.message or UPSTREAM_FAILURE_MESSAGE,
            resp.status_code,
            error_code=body.code or str(resp.status_code),
            kind=ErrorKind.UPSTREAM_ERROR,
        )


def _parse_error_body(content: bytes) -> UpstreamErrorBody | None:
    try:
        body = UpstreamErrorBody.model_validate_json(content)
    except ValidationError:
        return None
    if body.code is None and body.message is None:
        return None
    return body
