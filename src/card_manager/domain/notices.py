"""User-facing notification models."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """How a notice should be presented."""

    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A transient, non-blocking message shown to the user."""

    title: str
    description: str
    severity: Severity = Severity.INFO
