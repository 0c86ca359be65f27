"""Request handler — list elements currently in a given alarm state.

Pipeline: validate body → parse ``FilterRequest`` → validate alarm level →
query the element source → truncate to ``limit`` → serialize as JSON.
Every failure is returned as a ``HandlerError``; ``handle`` never raises.
"""

from __future__ import annotations

import structlog
from pydantic import TypeAdapter, ValidationError

from src.api.errors import HandlerError, parse_error, query_error, validation_error
from src.core.types import (
    AlarmLevel,
    ApiTriggerInput,
    ApiTriggerOutput,
    ElementSeverityFilter,
    ElementSummary,
    FilterRequest,
    StatusCode,
)
from src.elements.inventory import ElementSource

logger = structlog.get_logger(__name__)

EMPTY_BODY_MESSAGE = "Request body cannot be empty"
PARSE_FAILED_MESSAGE = "Could not parse request body."
INVALID_ALARM_LEVEL_MESSAGE = "Invalid alarm level passed, possible values are: " + ", ".join(
    level.value for level in AlarmLevel
)
QUERY_FAILED_MESSAGE = "Something went wrong fetching the Elements."

_SUMMARIES = TypeAdapter(list[ElementSummary])


class RequestHandler:
    """Serves one API trigger per call against an element source.

    Usage::

        handler = RequestHandler(load_inventory("config/elements.yaml"))
        output = handler.handle('{"alarmLevel": "Critical", "limit": 2}')
        output.response_code, output.response_body
    """

    def __init__(self, source: ElementSource) -> None:
        self._source = source

    def on_api_trigger(self, request: ApiTriggerInput) -> ApiTriggerOutput:
        """Entry point for trigger-shaped input."""
        return self.handle(request.raw_body)

    def handle(self, raw_body: str | None) -> ApiTriggerOutput:
        result = self._parse(raw_body)
        if isinstance(result, HandlerError):
            return self._reject(result)

        level = self._validate_level(result)
        if isinstance(level, HandlerError):
            return self._reject(level)

        summaries = self._fetch(ElementSeverityFilter.for_level(level), result.limit)
        if isinstance(summaries, HandlerError):
            return summaries.to_output()

        logger.debug("elements_served", alarm_level=level.value, count=len(summaries))
        return ApiTriggerOutput(
            response_body=_SUMMARIES.dump_json(summaries, by_alias=True).decode(),
            response_code=StatusCode.OK,
        )

    # ── Steps ───────────────────────────────────────────────────

    @staticmethod
    def _parse(raw_body: str | None) -> FilterRequest | HandlerError:
        if raw_body is None or not raw_body.strip():
            return validation_error(EMPTY_BODY_MESSAGE)
        try:
            return FilterRequest.model_validate_json(raw_body)
        except ValidationError:
            return parse_error(PARSE_FAILED_MESSAGE)

    @staticmethod
    def _validate_level(request: FilterRequest) -> AlarmLevel | HandlerError:
        value = request.alarm_level
        if value is None or not value.strip():
            return validation_error(INVALID_ALARM_LEVEL_MESSAGE)
        try:
            return AlarmLevel(value)
        except ValueError:
            return validation_error(INVALID_ALARM_LEVEL_MESSAGE)

    def _fetch(
        self, severity_filter: ElementSeverityFilter, limit: int,
    ) -> list[ElementSummary] | HandlerError:
        try:
            records = self._source.find_elements(severity_filter)
            summaries = [ElementSummary.from_record(r) for r in records]
        except Exception:
            logger.exception("element_query_failed", levels=sorted(severity_filter.levels))
            return query_error(QUERY_FAILED_MESSAGE)
        return summaries[:max(limit, 0)]

    @staticmethod
    def _reject(error: HandlerError) -> ApiTriggerOutput:
        logger.info("request_rejected", kind=error.kind.value, status=int(error.status))
        return error.to_output()
