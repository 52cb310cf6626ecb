"""Colored operation logger — ANSI-colored console logging for the CRUD pipeline.

Provides an OperationLogger with color-coded output per pipeline stage,
making it easy to visually trace a request through validate → authorize →
store in the terminal.

Color scheme:
    🟡 Yellow  — Validation
    🔵 Blue    — Authentication / ownership
    🟣 Magenta — Uniqueness and reference checks
    🟢 Green   — Store writes
    🔴 Red     — Rejections
    ⚪ Gray    — Details
"""

import logging
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Pipeline Stage Definitions ───────────────────────────────────────

class OperationStage:
    """Predefined pipeline stages with colors and icons."""

    AUTH = ("AUTH", _Colors.BLUE, "🔑")
    VALIDATE = ("VALIDATE", _Colors.YELLOW, "📋")
    REFERENCES = ("REFS", _Colors.MAGENTA, "🔗")
    UNIQUE = ("UNIQUE", _Colors.MAGENTA, "🧬")
    STORE = ("STORE", _Colors.GREEN, "💾")
    QUERY = ("QUERY", _Colors.CYAN, "🔎")
    REJECTED = ("REJECTED", _Colors.RED, "⛔")


def _format_details(kwargs: dict[str, Any]) -> str:
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


# ── OperationLogger ──────────────────────────────────────────────────

class OperationLogger:
    """Color-coded logger for resource operations.

    Stage steps go to DEBUG, completed writes to INFO and rejections to
    WARNING, so the default INFO level shows one line per mutation.

    Usage:
        log = OperationLogger("ResourcePipeline", "contacts")
        log.step(OperationStage.VALIDATE, "Validating payload")
        log.complete(OperationStage.STORE, "Created", id=record.id)
    """

    def __init__(self, component_name: str, resource: str):
        self._logger = logging.getLogger(component_name)
        self._resource = resource

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.DIM}{self._resource}{_Colors.RESET} {color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.debug(formatted)

    def complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.DIM}{self._resource}{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.info(formatted)

    def rejected(self, stage: tuple[str, str, str], reason: str, **kwargs: Any) -> None:
        label, _, _ = stage
        icon = OperationStage.REJECTED[2]
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.DIM}{self._resource}{_Colors.RESET} "
            f"{_Colors.RED}{reason}{_Colors.RESET}"
        )
        if kwargs:
            formatted += _format_details(kwargs)
        self._logger.warning(formatted)
