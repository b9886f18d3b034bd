"""
Succession walk: the linear order in which a diagram's nodes are visited.

Starting at the edge that leaves a process start event, the walk keeps
following the first edge whose source is the current edge's target. When
no such edge exists, the current edge's target is the terminal node.

Branching is not modelled: at a node with several outgoing edges only the
first one in flow-index order is followed. Every edge may be followed once;
re-entering an edge means the flow loops and the walk fails instead of
running forever.
"""

import logging
from typing import List, Optional, Sequence, Set, Tuple

from bpmn_model.errors import NonTerminatingTraversalError, StartNotFoundError
from bpmn_model.models.diagram import FlowEdge
from bpmn_model.parser.flow_index import FlowIndex

logger = logging.getLogger(__name__)


class SuccessionWalker:
    """Walks a FlowIndex from a start event to its terminal node."""

    def __init__(self, flows: FlowIndex, start_event_ids: Sequence[str]):
        self.flows = flows
        self.start_event_ids = list(start_event_ids)

    def begin_edge(self) -> Tuple[int, FlowEdge]:
        """First edge leaving a start event, with its index position.

        Start events are tried in process order.

        Raises:
            StartNotFoundError: If no start event exists or none has an outgoing edge
        """
        if not self.start_event_ids:
            raise StartNotFoundError("Diagram has no start event")

        for start_id in self.start_event_ids:
            leaving = self.flows.outgoing(start_id)
            if leaving:
                return leaving[0]

        raise StartNotFoundError(
            f"No flow leaves start event(s): {', '.join(self.start_event_ids)}"
        )

    def next_edge(self, current: FlowEdge) -> Optional[Tuple[int, FlowEdge]]:
        """First edge whose source is ``current``'s target, or None."""
        if current.target_ref is None:
            return None

        branches = self.flows.outgoing(current.target_ref)
        if not branches:
            return None

        if len(branches) > 1:
            logger.debug(
                f"Node '{current.target_ref}' has {len(branches)} outgoing flows; following the first"
            )
        return branches[0]

    def walk(self) -> List[str]:
        """Element IDs in succession order.

        Raises:
            StartNotFoundError: If there is no start edge
            NonTerminatingTraversalError: If the flow loops back onto a followed edge
        """
        position, current = self.begin_edge()
        visited: Set[int] = {position}
        order: List[str] = [current.source_ref]

        while True:
            step = self.next_edge(current)
            if step is None:
                break

            position, edge = step
            if position in visited:
                raise NonTerminatingTraversalError(order + [edge.source_ref])

            visited.add(position)
            current = edge
            order.append(edge.source_ref)

        if current.target_ref is None:
            logger.warning(f"Flow '{current.id}' has no target; succession ends at its source")
        else:
            order.append(current.target_ref)

        return order
