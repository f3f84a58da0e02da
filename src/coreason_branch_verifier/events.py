# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Protocol

from coreason_branch_verifier.utils.logger import logger


class EventType(Enum):
    RUN_START = "run_start"
    CHECK_RUNNING = "check_running"
    CHECK_RESULT = "check_result"
    RUN_SUMMARY = "run_summary"
    ERROR = "error"


@dataclass
class VerificationEvent:
    type: EventType
    message: str
    timestamp: float = field(default_factory=time.time)
    payload: Dict[str, Any] = field(default_factory=dict)


class EventEmitter(Protocol):
    def emit(self, event: VerificationEvent) -> None:
        """Emits a verification event."""
        ...  # pragma: no cover


class LoguruEmitter:
    """Adapter that logs events to Loguru."""

    def emit(self, event: VerificationEvent) -> None:
        if event.type == EventType.ERROR:
            logger.error(f"[{event.type.value}] {event.message} | {event.payload}")
        elif event.type == EventType.CHECK_RESULT:
            status = event.payload.get("status", "unknown")
            if status == "fail":
                logger.warning(f"[{event.type.value}] {event.message} | {event.payload}")
            else:
                logger.info(f"[{event.type.value}] {event.message} | {event.payload}")
        elif event.type == EventType.CHECK_RUNNING:
            logger.debug(f"[{event.type.value}] {event.message}")
        else:
            logger.info(f"[{event.type.value}] {event.message} | {event.payload}")


class EventCollector:
    """Collects events in memory."""

    def __init__(self) -> None:
        self.events: List[VerificationEvent] = []

    def emit(self, event: VerificationEvent) -> None:
        self.events.append(event)

    def get_events(self) -> List[VerificationEvent]:
        return self.events


class CompositeEmitter:
    """Broadcasts events to multiple emitters."""

    def __init__(self, emitters: List[EventEmitter]) -> None:
        self.emitters = emitters

    def emit(self, event: VerificationEvent) -> None:
        for emitter in self.emitters:
            emitter.emit(event)
