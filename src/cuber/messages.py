"""Port message codec for the presentation-layer boundary.

Messages are JSON objects of the form ``{"port": <name>, "payload": <value>}``.
Inbound ports map onto controller commands; the single outbound port carries
the refreshed list of solves.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
)

from cuber.commands import (
    Command,
    CreateSolve,
    DeleteSolve,
    LatestSolvesChanged,
    RequestLatest,
)
from cuber.exceptions import InvalidCommandError
from cuber.types import SolveDraft, SolveRecord

REQUEST_LATEST_PORT = "requestLatestSolves"
CREATE_SOLVE_PORT = "createSolve"
DELETE_SOLVE_PORT = "requestDeleteSolve"
LATEST_SOLVES_PORT = "setLatestSolves"


# ── Inbound ────────────────────────────────────────────────────────

# Numbers must arrive as JSON numbers: no numeric strings, no booleans.
StrictNumber = Union[StrictInt, Annotated[StrictFloat, AllowInfNan(False)]]


class PortMessage(BaseModel):
    """Envelope shared by every message crossing the boundary."""

    port: str = Field(..., min_length=1)
    payload: Any = None


class SolveDraftPayload(BaseModel):
    """Payload of ``createSolve``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start: StrictNumber
    solve_time: StrictNumber = Field(
        ..., alias="solveTime",
    )


class DeleteSolvePayload(BaseModel):
    """Payload of ``requestDeleteSolve``."""

    id: StrictInt


def parse_command(message: Union[str, bytes, Dict[str, Any]]) -> Command:
    """Decode one inbound message into a controller command.

    Raises InvalidCommandError for malformed JSON, unknown ports or payloads
    that fail validation.
    """
    try:
        if isinstance(message, (str, bytes)):
            envelope = PortMessage.model_validate_json(message)
        else:
            envelope = PortMessage.model_validate(message)
    except ValidationError as exc:
        raise InvalidCommandError(f"Malformed port message: {exc}") from exc

    port = envelope.port
    try:
        if port == REQUEST_LATEST_PORT:
            if envelope.payload is not None:
                raise InvalidCommandError(
                    f"{port} takes no payload, got {envelope.payload!r}", port=port,
                )
            return RequestLatest()
        if port == CREATE_SOLVE_PORT:
            draft = SolveDraftPayload.model_validate(envelope.payload)
            return CreateSolve(
                draft=SolveDraft(start=draft.start, solve_time=draft.solve_time),
            )
        if port == DELETE_SOLVE_PORT:
            target = DeleteSolvePayload.model_validate({"id": envelope.payload})
            return DeleteSolve(solve_id=target.id)
    except ValidationError as exc:
        raise InvalidCommandError(f"Invalid payload for {port}: {exc}", port=port) from exc
    raise InvalidCommandError(f"Unknown port: {port}", port=port)


# ── Outbound ───────────────────────────────────────────────────────


class SolveOut(BaseModel):
    """Single solve as seen by the presentation layer."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    start: Union[int, float]
    solve_time: Union[int, float] = Field(..., serialization_alias="solveTime")

    @classmethod
    def from_record(cls, record: SolveRecord) -> "SolveOut":
        return cls(id=record.id, start=record.start, solve_time=record.solve_time)


def solves_payload(records: List[SolveRecord]) -> List[Dict[str, Any]]:
    return [
        SolveOut.from_record(r).model_dump(by_alias=True) for r in records
    ]


def encode_notification(
    notification: LatestSolvesChanged, indent: Optional[int] = None,
) -> str:
    """Serialize a notification as a ``setLatestSolves`` JSON message."""
    message = {
        "port": LATEST_SOLVES_PORT,
        "payload": solves_payload(list(notification.records)),
    }
    return json.dumps(message, indent=indent)
