"""
Flow index: every message and sequence flow in a document, flattened.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from lxml import etree

from bpmn_model.models.diagram import FlowEdge, FlowKind
from bpmn_model.parser.tags import (
    ATTR_ID,
    ATTR_NAME,
    ATTR_SOURCE_REF,
    ATTR_TARGET_REF,
    children,
    iter_elements,
)


def _edges_of_kind(root: etree._Element, namespace: str, kind: FlowKind) -> List[FlowEdge]:
    edges: List[FlowEdge] = []
    # Parents may sit at any depth: collaboration for message flows,
    # process or subProcess for sequence flows.
    for parent in iter_elements(root):
        for node in children(parent, namespace, kind.value):
            edges.append(
                FlowEdge(
                    id=node.get(ATTR_ID),
                    kind=kind,
                    source_ref=node.get(ATTR_SOURCE_REF),
                    target_ref=node.get(ATTR_TARGET_REF),
                    name=node.get(ATTR_NAME),
                )
            )
    return edges


@dataclass(frozen=True)
class FlowIndex:
    """Immutable ordered list of flow edges: message flows, then sequence flows."""

    edges: Tuple[FlowEdge, ...] = ()

    @classmethod
    def build(cls, root: etree._Element, namespace: str) -> "FlowIndex":
        messages = _edges_of_kind(root, namespace, FlowKind.MESSAGE)
        sequences = _edges_of_kind(root, namespace, FlowKind.SEQUENCE)
        return cls(edges=tuple(messages + sequences))

    def __iter__(self) -> Iterator[FlowEdge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def outgoing(self, element_id: str) -> List[Tuple[int, FlowEdge]]:
        """Edges whose source is ``element_id`` with their index positions, in index order."""
        return [
            (position, edge)
            for position, edge in enumerate(self.edges)
            if edge.source_ref == element_id
        ]
