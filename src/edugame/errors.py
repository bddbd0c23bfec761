# Area: Shared
"""
edugame.errors — Custom exception classes
==========================================

Defines the exception hierarchy for the game engine.
Each exception stores its context so it can be rendered as a
structured error block for logs and the CLI.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class EdugameError(Exception):
    """Base exception for all edugame package errors."""
    pass


class ContentFormatError(EdugameError):
    """Raised when a document cannot be turned into a playable GameSpec."""

    def __init__(
        self,
        reason: str,
        payload: Any = None,
        details: Optional[List[str]] = None,
    ):
        self.reason = reason
        self.payload = payload
        self.details = details or []
        super().__init__(f"Unplayable game content: {reason}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="CONTENT_FORMAT",
            subject="GameSpec loader",
            context={"reason": self.reason},
            payload=_excerpt(self.payload),
            details=self.details,
        )


class InvalidTransitionError(EdugameError):
    """Raised when a session phase transition is not allowed."""

    def __init__(self, phase: str, event: str):
        self.phase = phase
        self.event = event
        super().__init__(f"Invalid transition: {event} from {phase}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INVALID_TRANSITION",
            subject="Session",
            context={"phase": self.phase, "event": self.event},
            payload=None,
            details=None,
        )


class UnknownSectionTypeError(EdugameError):
    """Raised when no runtime handler exists for a section type."""

    def __init__(self, section_id: str, section_type: str):
        self.section_id = section_id
        self.section_type = section_type
        super().__init__(
            f"No handler for section '{section_id}' of type '{section_type}'"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="UNKNOWN_SECTION_TYPE",
            subject="Handler dispatch",
            context={"section_id": self.section_id, "section_type": self.section_type},
            payload=None,
            details=None,
        )


def _format_error_block(
    error_type: str,
    subject: str,
    context: Dict[str, Any],
    payload: Any,
    details: Optional[List[str]],
) -> str:
    """Format a structured error block."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " GAME ENGINE ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Component:    {subject}",
    ]

    for key, value in context.items():
        lines.append(f" {key + ':':<13} {value}")

    if payload is not None:
        lines.append("")
        lines.append(" ── PAYLOAD " + "─" * 52)
        lines.append(_indent_json(payload))

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        for detail in details:
            lines.append(f" • {detail}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _excerpt(payload: Any, limit: int = 400) -> Any:
    """Trim large text payloads so error blocks stay readable."""
    if isinstance(payload, str) and len(payload) > limit:
        return payload[:limit] + "..."
    return payload


def _indent_json(data: Any, indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        # Add leading space to each line
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
