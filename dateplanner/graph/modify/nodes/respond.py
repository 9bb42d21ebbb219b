"""Modify result node."""

from __future__ import annotations

from dateplanner.core.logger import format_fields, get_logger
from dateplanner.graph.modify.state import ModifyState
from dateplanner.schemas.enums import ModifyStatus

logger = get_logger(__name__)


def respond(state: ModifyState) -> ModifyState:
    """Set the result status from the suggested stop."""
    if state.get("error"):
        return state

    new_stop = state.get("new_stop")
    status = ModifyStatus.SUCCESS if new_stop is not None else ModifyStatus.NOT_FOUND
    logger.info(
        "Modify finished: %s",
        format_fields(
            operation=getattr(state.get("operation"), "value", state.get("operation")),
            status=status.value,
            stage=state.get("stage"),
        ),
    )
    return {**state, "status": status}
