"""Resolution Domain Events.

Emitted by the ResolutionEngine when a publisher is attached. Events
carry timestamps; resolutions never do.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class IntentionResolved:
    """Emitted after every successful resolution.

    Consumers:
    - Analytics (pattern usage per device/context)
    - Tuning (which rules actually win)
    """
    action: str
    pattern: str
    rule_id: str
    confidence: float
    dominant_constraints: Tuple[str, ...]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["dominant_constraints"] = list(self.dominant_constraints)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass(frozen=True)
class DefaultRuleApplied:
    """Emitted when no rule matched and the generic pattern was used.

    Consumers:
    - Rule authors (coverage gaps in the catalog)
    """
    action: str
    traits: Tuple[str, ...]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "traits": list(self.traits),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AmbiguousResolution:
    """Emitted when several rules tied at the top priority."""
    action: str
    chosen_pattern: str
    tied_patterns: Tuple[str, ...]
    confidence: float
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "chosen_pattern": self.chosen_pattern,
            "tied_patterns": list(self.tied_patterns),
            "confidence": self.confidence,
            "timestamp": self.timestamp.isoformat(),
        }
