"""
Diagram Model

Façade over the document loader and the indices built from a loaded BPMN
document. Every query returns a fresh list of frozen records.

Loading is atomic: the new document and all indices are assembled first
and only then replace the current state, so a failed load leaves the
previously loaded diagram (or the empty, unloaded state) in place.

IDs that resolve to no element are handled by the configured
ReferencePolicy: dropped with a warning and a ``references_dropped_total``
count (lenient), or raised as ReferenceNotFoundError (strict).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from lxml import etree

from bpmn_model.config import ModelConfig
from bpmn_model.core.observability import Timer, record_metric
from bpmn_model.errors import DiagramError, ReferenceNotFoundError
from bpmn_model.models.diagram import (
    Element,
    ElementKind,
    Event,
    FlowEdge,
    Gateway,
    Lane,
    Pool,
    Process,
    Task,
)
from bpmn_model.parser.element_index import ElementIndex, to_element
from bpmn_model.parser.flow_index import FlowIndex
from bpmn_model.parser.lanes import LaneExtractor, extract_processes, process_nodes, start_event_node
from bpmn_model.parser.loader import DocumentLoader
from bpmn_model.parser.succession import SuccessionWalker
from bpmn_model.parser.tags import (
    ATTR_ID,
    ATTR_SOURCE_REF,
    ATTR_TARGET_REF,
    TAG_DATA_INPUT_ASSOCIATION,
    TAG_DATA_OUTPUT_ASSOCIATION,
    TAG_ROOT,
    attribute_value,
    child_text,
    children,
    qname,
)

logger = logging.getLogger(__name__)

ElementRef = Union[Element, str]


@dataclass(frozen=True)
class DiagramState:
    """Document plus every index derived from it, built together per load."""

    root: etree._Element
    flows: FlowIndex
    elements: ElementIndex
    lanes: LaneExtractor
    processes: Tuple[Process, ...]
    start_event_ids: Tuple[str, ...]

    @classmethod
    def build(cls, root: etree._Element, config: ModelConfig) -> "DiagramState":
        starts = []
        for process in process_nodes(root, config.namespace):
            start = start_event_node(process, config.namespace)
            if start is not None and start.get(ATTR_ID) is not None:
                starts.append(start.get(ATTR_ID))

        return cls(
            root=root,
            flows=FlowIndex.build(root, config.namespace),
            elements=ElementIndex(root),
            lanes=LaneExtractor(root, config.namespace, config.unknown_value),
            processes=tuple(extract_processes(root, config.namespace, config.unknown_value)),
            start_event_ids=tuple(starts),
        )

    @classmethod
    def empty(cls, config: ModelConfig) -> "DiagramState":
        return cls.build(etree.Element(qname(config.namespace, TAG_ROOT)), config)


class DiagramModel:
    """Typed, queryable model of a BPMN process diagram."""

    def __init__(self, config: Optional[ModelConfig] = None):
        """Initialize an unloaded model.

        Args:
            config: Model configuration (defaults to ModelConfig())
        """
        self.config = config or ModelConfig()
        self.loader = DocumentLoader(self.config.namespace)
        self._state = DiagramState.empty(self.config)
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ==================
    # Loading
    # ==================

    def load_from_file(self, path: Union[str, Path]) -> None:
        """Load a diagram from a file path.

        Raises:
            OSError: If the file cannot be read
            MalformedDocumentError: If the file is not a BPMN document
        """
        self._load(lambda: self.loader.parse_file(path))

    def load_from_text(self, data: str) -> None:
        """Load a diagram from XML text.

        Raises:
            MalformedDocumentError: If the text is not a BPMN document
        """
        self._load(lambda: self.loader.parse_text(data))

    def load_from_bytes(self, data: bytes) -> None:
        """Load a diagram from raw XML bytes.

        Raises:
            MalformedDocumentError: If the bytes are not a BPMN document
        """
        self._load(lambda: self.loader.parse_bytes(data))

    def _load(self, parse: Callable[[], etree._Element]) -> None:
        with Timer("diagram_load", log=self.config.enable_metrics):
            try:
                root = parse()
            except DiagramError:
                self._metric("diagram_load_failures_total")
                raise
            state = DiagramState.build(root, self.config)

        self._state = state
        self._loaded = True
        self._metric("diagram_loads_total")
        logger.debug(
            f"Diagram loaded: {len(state.processes)} process(es), "
            f"{len(state.flows)} flow(s), {len(state.elements)} identified node(s)"
        )

    # ==================
    # Reference handling
    # ==================

    def _metric(self, name: str, **attributes: str) -> None:
        if self.config.enable_metrics:
            record_metric(name, 1, attributes or None)

    def _drop(self, reference: str, context: str) -> None:
        if self.config.is_strict:
            raise ReferenceNotFoundError(reference, context)
        logger.warning(f"Dropping unresolved reference '{reference}' ({context})")
        self._metric("references_dropped_total", context=context)

    def _resolve(self, reference: str, context: str) -> Optional[Element]:
        node = self._state.elements.resolve_by_id(reference)
        if node is None:
            self._drop(reference, context)
            return None
        return to_element(node)

    def _node_for(self, element: ElementRef) -> Optional[etree._Element]:
        element_id = element.id if isinstance(element, Element) else element
        return self._state.elements.resolve_by_id(element_id)

    # ==================
    # Queries
    # ==================

    def elements(self) -> List[Element]:
        """Every element referenced by a flow edge, in first-reference order."""
        result: List[Element] = []
        for ref, element in self._state.elements.all_elements(self._state.flows).items():
            if element is None:
                self._drop(ref, "flow edge")
            else:
                result.append(element)
        return result

    def gateways(self) -> List[Gateway]:
        """Declared for the query surface; gateway records are not produced."""
        return []

    def events(self) -> List[Event]:
        return [
            Event(
                id=element.id,
                name=element.name if element.name is not None else self.config.unknown_value,
                kind=element.kind,
                tag=element.tag,
            )
            for element in self.elements()
            if element.kind == ElementKind.EVENT
        ]

    def tasks(self) -> List[Task]:
        unknown = self.config.unknown_value
        return [
            Task(
                id=element.id,
                name=element.name if element.name is not None else unknown,
                kind=element.kind,
                tag=element.tag,
                neuron_id=element.attribute(self.config.neuron_attribute, unknown),
                action_id=element.attribute(self.config.action_attribute, unknown),
            )
            for element in self.elements()
            if element.kind == ElementKind.TASK
        ]

    def lanes(self) -> List[Lane]:
        """Lanes of every process. Members are available via ``elements_in_lane``."""
        return self._state.lanes.lanes()

    def elements_in_lane(self, lane: Union[Lane, str]) -> List[Element]:
        """Elements referenced by a lane's flowNodeRef entries.

        Args:
            lane: Lane record or lane ID

        Returns:
            Resolved member elements; empty for an unknown lane
        """
        entry = self._state.lanes.entry_for(lane)
        if entry is None:
            return []

        members: List[Element] = []
        for ref in entry.refs:
            element = self._resolve(ref, f"lane {entry.lane.name}")
            if element is not None:
                members.append(element)
        return members

    def pools(self) -> List[Pool]:
        """Declared for the query surface; pool records are not produced."""
        return []

    def processes(self) -> List[Process]:
        return list(self._state.processes)

    def flows(self) -> List[FlowEdge]:
        """Message flows followed by sequence flows, each in document order."""
        return list(self._state.flows.edges)

    def succession_order(self) -> List[Element]:
        """Elements in the order the flow visits them from the start event.

        Raises:
            StartNotFoundError: If no flow leaves a start event
            NonTerminatingTraversalError: If the flow loops
        """
        walker = SuccessionWalker(self._state.flows, self._state.start_event_ids)
        order: List[Element] = []
        for ref in walker.walk():
            element = self._resolve(ref, "succession")
            if element is not None:
                order.append(element)
        return order

    # ==================
    # Element lookups
    # ==================

    def find_element(self, element_id: str) -> Optional[Element]:
        node = self._state.elements.resolve_by_id(element_id)
        return to_element(node) if node is not None else None

    def find_element_by_attribute(self, name: str, value: str) -> Optional[Element]:
        node = self._state.elements.resolve_by_attribute(name, value)
        return to_element(node) if node is not None else None

    def attribute(self, element: ElementRef, key: str) -> str:
        """Attribute value of an element, or the unknown sentinel."""
        node = self._node_for(element)
        if node is None:
            return self.config.unknown_value
        return attribute_value(node, key, self.config.unknown_value)

    def has_data_input(self, element: ElementRef) -> bool:
        node = self._node_for(element)
        if node is None:
            return False
        return len(children(node, self.config.namespace, TAG_DATA_INPUT_ASSOCIATION)) > 0

    def data_inputs(self, element: ElementRef) -> List[Element]:
        """Elements feeding ``element`` through its dataInputAssociation children."""
        return self._associated(element, TAG_DATA_INPUT_ASSOCIATION, ATTR_SOURCE_REF)

    def data_outputs(self, element: ElementRef) -> List[Element]:
        """Elements written by ``element`` through its dataOutputAssociation children."""
        return self._associated(element, TAG_DATA_OUTPUT_ASSOCIATION, ATTR_TARGET_REF)

    def _associated(self, element: ElementRef, tag: str, ref_tag: str) -> List[Element]:
        node = self._node_for(element)
        if node is None:
            return []

        result: List[Element] = []
        for association in children(node, self.config.namespace, tag):
            ref = child_text(association, ref_tag)
            if ref is None:
                continue
            resolved = self._resolve(ref, f"{tag} of {node.get(ATTR_ID)}")
            if resolved is not None:
                result.append(resolved)
        return result
