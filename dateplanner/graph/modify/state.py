"""Plan modification graph state."""

from typing import TypedDict

from dateplanner.schemas.enums import ModifyOperation, ModifyStatus, VenueCategory
from dateplanner.schemas.plan import DatePreferences, DateStop


class ModifyState(TypedDict, total=False):
    """Swap/add graph state.

    Keys:
        operation: SWAP or ADD
        preferences: preferences the plan was built with
        all_stops: every stop of the current plan
        stop_to_swap: stop being replaced (SWAP)
        insert_after_index: 0-based index to insert after (ADD)
        category: category forced by the caller (ADD), suggested when None
        new_stop: suggested stop, None when nothing was found
        stage: name of the search stage that produced the stop
        status: result status
        error: error message
    """

    # Input
    operation: ModifyOperation
    preferences: DatePreferences
    all_stops: list[DateStop]
    stop_to_swap: DateStop | None
    insert_after_index: int
    category: VenueCategory | None

    # Output
    new_stop: DateStop | None
    stage: str | None
    status: ModifyStatus
    error: str | None
