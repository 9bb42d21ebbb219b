"""Plan modification graph nodes."""

from dateplanner.graph.modify.nodes.add import add_stop
from dateplanner.graph.modify.nodes.respond import respond
from dateplanner.graph.modify.nodes.swap import swap_stop

__all__ = ["swap_stop", "add_stop", "respond"]
