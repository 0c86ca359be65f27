"""Domain types for the elements API — requests, filters and element records."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class AlarmLevel(StrEnum):
    """Alarm severity of a monitored element.

    Member order is the order reported back to callers as valid values.
    """

    WARNING = "Warning"
    MINOR = "Minor"
    MAJOR = "Major"
    CRITICAL = "Critical"


class StatusCode(IntEnum):
    """HTTP-style status codes returned by the API trigger."""

    OK = 200
    BAD_REQUEST = 400
    INTERNAL_SERVER_ERROR = 500


# ── Request ─────────────────────────────────────────────────────


class FilterRequest(BaseModel):
    """Inbound request body: which alarm level to list and how many elements.

    Keys bind case-insensitively, so ``alarmLevel``, ``AlarmLevel`` and
    ``alarmlevel`` all populate ``alarm_level``.
    """

    model_config = ConfigDict(extra="ignore")

    alarm_level: str | None = None
    limit: int = 0

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            # Let pydantic reject non-object payloads.
            return data
        by_folded = {name.replace("_", ""): name for name in cls.model_fields}
        folded: dict[str, Any] = {}
        for key, value in data.items():
            name = by_folded.get(str(key).replace("_", "").lower())
            if name is not None:
                folded[name] = value
        return folded


class ElementSeverityFilter(BaseModel):
    """Selector passed to the element source; one flag per alarm level."""

    model_config = ConfigDict(frozen=True)

    warning_only: bool = False
    minor_only: bool = False
    major_only: bool = False
    critical_only: bool = False

    @classmethod
    def for_level(cls, level: AlarmLevel) -> ElementSeverityFilter:
        """Build a filter with exactly the flag for ``level`` set."""
        flag = {
            AlarmLevel.WARNING: "warning_only",
            AlarmLevel.MINOR: "minor_only",
            AlarmLevel.MAJOR: "major_only",
            AlarmLevel.CRITICAL: "critical_only",
        }[level]
        return cls(**{flag: True})

    @property
    def levels(self) -> frozenset[AlarmLevel]:
        """Alarm levels selected by the set flags (empty when none are set)."""
        selected: set[AlarmLevel] = set()
        if self.warning_only:
            selected.add(AlarmLevel.WARNING)
        if self.minor_only:
            selected.add(AlarmLevel.MINOR)
        if self.major_only:
            selected.add(AlarmLevel.MAJOR)
        if self.critical_only:
            selected.add(AlarmLevel.CRITICAL)
        return frozenset(selected)

    def matches(self, record: ElementRecord) -> bool:
        levels = self.levels
        if not levels:
            return True
        return record.alarm_level in levels


# ── Elements ────────────────────────────────────────────────────


class ElementRecord(BaseModel):
    """Raw element record as held by an element source."""

    data_miner_id: int
    element_id: int
    element_name: str
    protocol_name: str = ""
    protocol_version: str = ""
    alarm_level: AlarmLevel | None = None


class ElementSummary(BaseModel):
    """Element as returned to API callers (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data_miner_id: int
    element_id: int
    name: str
    protocol_name: str
    protocol_version: str

    @classmethod
    def from_record(cls, record: ElementRecord) -> ElementSummary:
        return cls(
            data_miner_id=record.data_miner_id,
            element_id=record.element_id,
            name=record.element_name,
            protocol_name=record.protocol_name,
            protocol_version=record.protocol_version,
        )


# ── Trigger ─────────────────────────────────────────────────────


class ApiTriggerInput(BaseModel):
    """Inbound API trigger as delivered by the transport."""

    raw_body: str | None = None


class ApiTriggerOutput(BaseModel):
    """Response handed back to the transport."""

    response_body: str = ""
    response_code: int = StatusCode.OK
