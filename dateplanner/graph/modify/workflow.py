"""Plan modification graph workflow."""

from langgraph.graph import END, START, StateGraph

from dateplanner.graph.modify.nodes import add_stop, respond, swap_stop
from dateplanner.graph.modify.state import ModifyState
from dateplanner.schemas.enums import ModifyOperation


def _route_operation(state: ModifyState) -> str:
    """Pick the node for the requested operation."""
    if state.get("operation") == ModifyOperation.ADD:
        return "add_stop"
    return "swap_stop"


def _create_modify_workflow() -> StateGraph:
    """Build the swap/add graph."""
    workflow = StateGraph(ModifyState)

    workflow.add_node("swap_stop", swap_stop)
    workflow.add_node("add_stop", add_stop)
    workflow.add_node("respond", respond)

    workflow.add_conditional_edges(START, _route_operation, ["swap_stop", "add_stop"])
    workflow.add_edge("swap_stop", "respond")
    workflow.add_edge("add_stop", "respond")
    workflow.add_edge("respond", END)

    return workflow


compiled_modify_graph = _create_modify_workflow().compile()
