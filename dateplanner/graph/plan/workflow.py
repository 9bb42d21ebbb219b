"""Plan generation graph workflow."""

from langgraph.graph import END, StateGraph

from dateplanner.graph.plan.nodes import (
    build_slots,
    enrich_stops,
    fetch_candidates,
    fill_slots,
    finalize_plan,
)
from dateplanner.graph.plan.state import PlanState


def _create_plan_workflow() -> StateGraph:
    """Build the plan generation graph."""
    workflow = StateGraph(PlanState)

    workflow.add_node("fetch_candidates", fetch_candidates)
    workflow.add_node("build_slots", build_slots)
    workflow.add_node("fill_slots", fill_slots)
    workflow.add_node("enrich_stops", enrich_stops)
    workflow.add_node("finalize_plan", finalize_plan)

    workflow.set_entry_point("fetch_candidates")
    workflow.add_edge("fetch_candidates", "build_slots")
    workflow.add_edge("build_slots", "fill_slots")
    workflow.add_edge("fill_slots", "enrich_stops")
    workflow.add_edge("enrich_stops", "finalize_plan")
    workflow.add_edge("finalize_plan", END)

    return workflow


compiled_plan_graph = _create_plan_workflow().compile()
