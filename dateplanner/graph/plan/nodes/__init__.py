"""Plan generation graph nodes."""

from dateplanner.graph.plan.nodes.candidates import fetch_candidates
from dateplanner.graph.plan.nodes.enrich import enrich_stops
from dateplanner.graph.plan.nodes.fill import fill_slots
from dateplanner.graph.plan.nodes.finalize import finalize_plan
from dateplanner.graph.plan.nodes.slots import build_slots

__all__ = ["fetch_candidates", "build_slots", "fill_slots", "enrich_stops", "finalize_plan"]
