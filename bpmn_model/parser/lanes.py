"""
Process and lane structure.

Lanes live under ``process > laneSet > lane`` and name their members
through ``flowNodeRef`` children holding element IDs.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from lxml import etree

from bpmn_model.models.diagram import Lane, Process
from bpmn_model.parser.tags import (
    ATTR_ID,
    ATTR_NAME,
    TAG_END_EVENT,
    TAG_FLOW_NODE_REF,
    TAG_LANE,
    TAG_LANE_SET,
    TAG_PROCESS,
    TAG_START_EVENT,
    child,
    children,
)


def process_nodes(root: etree._Element, namespace: str) -> List[etree._Element]:
    """``process`` children of the ``definitions`` root."""
    return children(root, namespace, TAG_PROCESS)


def start_event_node(process: etree._Element, namespace: str) -> Optional[etree._Element]:
    """The process's start event; only the first one is considered."""
    return child(process, namespace, TAG_START_EVENT)


def _ids(nodes: List[etree._Element]) -> List[str]:
    return [node.get(ATTR_ID) for node in nodes if node.get(ATTR_ID) is not None]


@dataclass(frozen=True)
class LaneEntry:
    """A lane record together with the raw IDs it references."""

    lane: Lane
    refs: Tuple[str, ...]


class LaneExtractor:
    """Extracts lanes and their member references from every process."""

    def __init__(self, root: etree._Element, namespace: str, unknown_value: str):
        self.namespace = namespace
        self.unknown_value = unknown_value
        self.entries: Tuple[LaneEntry, ...] = tuple(self._extract(root))

    def _lane_nodes(self, process: etree._Element) -> List[etree._Element]:
        lane_set = child(process, self.namespace, TAG_LANE_SET)
        if lane_set is None:
            return []
        return children(lane_set, self.namespace, TAG_LANE)

    def _extract(self, root: etree._Element) -> List[LaneEntry]:
        entries: List[LaneEntry] = []
        for process in process_nodes(root, self.namespace):
            for node in self._lane_nodes(process):
                refs = tuple(
                    ref.text.strip()
                    for ref in children(node, self.namespace, TAG_FLOW_NODE_REF)
                    if ref.text and ref.text.strip()
                )
                lane = Lane(
                    id=node.get(ATTR_ID),
                    name=node.get(ATTR_NAME, self.unknown_value),
                    process_id=process.get(ATTR_ID),
                )
                entries.append(LaneEntry(lane=lane, refs=refs))
        return entries

    def lanes(self) -> List[Lane]:
        return [entry.lane for entry in self.entries]

    def entry_for(self, lane: Union[Lane, str]) -> Optional[LaneEntry]:
        """Entry for a lane given as a record or a lane ID; None if unknown."""
        for entry in self.entries:
            if isinstance(lane, Lane):
                if entry.lane == lane:
                    return entry
            elif entry.lane.id == lane:
                return entry
        return None


def extract_processes(root: etree._Element, namespace: str, unknown_value: str) -> List[Process]:
    """Snapshot every top-level process with its events and lanes."""
    processes: List[Process] = []
    for node in process_nodes(root, namespace):
        lane_set = child(node, namespace, TAG_LANE_SET)
        lanes = children(lane_set, namespace, TAG_LANE) if lane_set is not None else []
        processes.append(
            Process(
                id=node.get(ATTR_ID),
                name=node.get(ATTR_NAME, unknown_value),
                start_event_ids=_ids(children(node, namespace, TAG_START_EVENT)),
                end_event_ids=_ids(children(node, namespace, TAG_END_EVENT)),
                lane_ids=_ids(lanes),
            )
        )
    return processes
