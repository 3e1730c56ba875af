"""Engine-level events observed by the presentation layer."""
from __future__ import annotations

from typing import TYPE_CHECKING

from core.events.signal import Signal

if TYPE_CHECKING:
    from core.services.validation.results import ValidationSummary


class DomainEvents:
    def __init__(self) -> None:
        self.validation_completed: Signal[ValidationSummary] = Signal()


# SINGLE global instance
domain_events = DomainEvents()
