"""
Element index: ID and attribute lookups over a parsed document.
"""

from typing import Dict, Iterable, List, Optional

from lxml import etree

from bpmn_model.models.diagram import Element, FlowEdge
from bpmn_model.parser.classifier import classify
from bpmn_model.parser.tags import ATTR_ID, ATTR_NAME, attribute_map, attribute_value, iter_elements, local_name


def referenced_ids(edges: Iterable[FlowEdge]) -> List[str]:
    """Distinct source/target references across ``edges``, first-seen order."""
    seen: Dict[str, None] = {}
    for edge in edges:
        for ref in (edge.source_ref, edge.target_ref):
            if ref is not None:
                seen.setdefault(ref, None)
    return list(seen)


def to_element(node: etree._Element) -> Element:
    """Snapshot an lxml node as an Element record."""
    return Element(
        id=node.get(ATTR_ID, ""),
        tag=local_name(node),
        kind=classify(node),
        name=node.get(ATTR_NAME),
        attributes=attribute_map(node),
    )


class ElementIndex:
    """Resolves document nodes by ID or by arbitrary attribute.

    The ID table is built once from a depth-first walk; when IDs repeat,
    the first node in document order wins.
    """

    def __init__(self, root: etree._Element):
        self.root = root
        self._by_id: Dict[str, etree._Element] = {}
        for node in iter_elements(root):
            node_id = node.get(ATTR_ID)
            if node_id is not None:
                self._by_id.setdefault(node_id, node)

    def __len__(self) -> int:
        return len(self._by_id)

    def resolve_by_id(self, element_id: str) -> Optional[etree._Element]:
        """Node whose ``id`` equals ``element_id``, or None."""
        return self._by_id.get(element_id)

    def all_elements(self, edges: Iterable[FlowEdge]) -> Dict[str, Optional[Element]]:
        """Every ID referenced by ``edges`` mapped to its record (None when unresolved)."""
        result: Dict[str, Optional[Element]] = {}
        for ref in referenced_ids(edges):
            node = self.resolve_by_id(ref)
            result[ref] = to_element(node) if node is not None else None
        return result

    def resolve_by_attribute(self, name: str, value: str) -> Optional[etree._Element]:
        """First node in document order whose attribute ``name`` equals ``value``."""
        if name == ATTR_ID:
            return self.resolve_by_id(value)
        for node in iter_elements(self.root):
            if attribute_value(node, name) == value:
                return node
        return None
