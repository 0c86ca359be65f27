"""Core module — config, types, logging."""

from src.core.config import Settings, get_settings, load_settings, reset_settings
from src.core.logging import setup_logging
from src.core.types import (
    AlarmLevel,
    ApiTriggerInput,
    ApiTriggerOutput,
    ElementRecord,
    ElementSeverityFilter,
    ElementSummary,
    FilterRequest,
    StatusCode,
)

__all__ = [
    "AlarmLevel",
    "ApiTriggerInput",
    "ApiTriggerOutput",
    "ElementRecord",
    "ElementSeverityFilter",
    "ElementSummary",
    "FilterRequest",
    "Settings",
    "StatusCode",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
]
