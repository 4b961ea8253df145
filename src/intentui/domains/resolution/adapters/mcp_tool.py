"""MCP Tool Adapter for intention resolution.

Translates MCP tool calls (plain JSON arguments) into ResolutionEngine
invocations and converts the results back into plain dicts. Malformed
input never raises out of this layer: it is reported as
``{"success": False, "error": ...}`` so the calling model can correct
itself.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ...behavior.aggregates import BehaviorCatalog
from ...behavior.value_objects import UnknownTrait
from ...constraints.modifiers import apply_presets, create_default_constraints
from ...constraints.parsing import apply_overrides
from ...constraints.value_objects import ConstraintSet
from ...intention.parsing import parse_intention_dict, parse_intention_response
from ..services import ResolutionEngine
from ..value_objects import UnresolvedPattern

logger = logging.getLogger(__name__)


class ResolutionToolAdapter:
    """Adapts resolve_intention / describe_traits / list_affinity_rules calls.

    This adapter:
    1. Parses the intention payload (dict or JSON string)
    2. Builds a ConstraintSet from presets and overrides
    3. Calls ResolutionEngine.resolve()
    4. Returns a structured response dict
    """

    def __init__(
        self,
        engine: Optional[ResolutionEngine] = None,
        default_presets: Iterable[str] = (),
    ) -> None:
        self._engine = engine or ResolutionEngine.with_builtins()
        self._default_presets = tuple(default_presets)

    @property
    def engine(self) -> ResolutionEngine:
        return self._engine

    def build_constraints(
        self,
        presets: Optional[Iterable[str]] = None,
        overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> ConstraintSet:
        names = self._default_presets if presets is None else tuple(presets)
        constraints = apply_presets(create_default_constraints(), names)
        if overrides:
            constraints = apply_overrides(constraints, overrides)
        return constraints

    def resolve_payload(
        self,
        intention: Union[str, Dict[str, Any]],
        presets: Optional[List[str]] = None,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Resolve an intention payload.

        Returns dict with:
            success: bool
            resolution: Resolution.to_dict() (success only)
            error: str (failure only)
        """
        if isinstance(intention, str):
            parsed = parse_intention_response(intention)
        else:
            parsed = parse_intention_dict(intention)
        if not parsed.success:
            logger.warning("Rejected intention payload: %s", parsed.error)
            return {"success": False, "error": parsed.error}

        try:
            constraints = self.build_constraints(presets, overrides)
        except ValueError as exc:
            logger.warning("Rejected constraints: %s", exc)
            return {"success": False, "error": str(exc)}

        try:
            resolution = self._engine.resolve(parsed.intention, constraints)
        except UnresolvedPattern as exc:
            logger.error("Resolution failed: %s", exc)
            return {"success": False, "error": str(exc)}

        response: Dict[str, Any] = {"success": True, "resolution": resolution.to_dict()}
        if parsed.display_message:
            response["display_message"] = parsed.display_message
        return response

    def describe_traits(self, traits: Optional[List[str]] = None) -> Dict[str, Any]:
        """Catalog entries for the given traits, or for all of them.

        When traits are named, ``combined`` carries their merged ARIA,
        keyboard and event metadata, the traits they transitively
        require, and any conflicting pairs.
        """
        catalog: BehaviorCatalog = self._engine.catalog
        try:
            primitives = (
                [catalog.lookup(t) for t in traits] if traits else list(catalog)
            )
        except UnknownTrait as exc:
            return {"success": False, "error": str(exc)}
        response: Dict[str, Any] = {
            "success": True, "traits": [p.to_dict() for p in primitives],
        }
        if traits:
            named = [p.trait for p in primitives]
            response["combined"] = {
                "requires": [t.value for t in catalog.required_closure(named)],
                "conflicts": [[a.value, b.value] for a, b in catalog.conflicts_in(named)],
                "aria": catalog.aria_for(named),
                "keyboard": [k.to_dict() for k in catalog.keyboard_for(named)],
                "events": list(catalog.events_for(named)),
            }
        return response

    def list_rules(self) -> Dict[str, Any]:
        rules = [r.to_dict() for r in self._engine.rule_set]
        return {"success": True, "count": len(rules), "rules": rules}
