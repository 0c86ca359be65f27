"""Error kinds returned by the request handler."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from src.core.types import ApiTriggerOutput, StatusCode


class ErrorKind(StrEnum):
    """Why a request could not be served."""

    VALIDATION = "VALIDATION"  # empty body, unknown alarm level
    PARSE = "PARSE"  # body is not the expected JSON shape
    QUERY = "QUERY"  # element source failed


# Parse failures answer 500 rather than 400 for compatibility with
# existing callers of the trigger.
_STATUS_BY_KIND: dict[ErrorKind, StatusCode] = {
    ErrorKind.VALIDATION: StatusCode.BAD_REQUEST,
    ErrorKind.PARSE: StatusCode.INTERNAL_SERVER_ERROR,
    ErrorKind.QUERY: StatusCode.INTERNAL_SERVER_ERROR,
}


class HandlerError(BaseModel):
    """A terminal request failure, carried as a value rather than raised."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    @property
    def status(self) -> StatusCode:
        return _STATUS_BY_KIND[self.kind]

    def to_output(self) -> ApiTriggerOutput:
        return ApiTriggerOutput(response_body=self.message, response_code=self.status)


def validation_error(message: str) -> HandlerError:
    return HandlerError(kind=ErrorKind.VALIDATION, message=message)


def parse_error(message: str) -> HandlerError:
    return HandlerError(kind=ErrorKind.PARSE, message=message)


def query_error(message: str) -> HandlerError:
    return HandlerError(kind=ErrorKind.QUERY, message=message)
