"""
Diagram Value Records

Pydantic-based immutable snapshots returned by DiagramModel queries.
Records are decoupled from the parsed XML tree: they are built once per
query and never reflect later loads.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ElementKind(str, Enum):
    """Coarse element kinds derived from a node's tag name."""

    GATEWAY = "gateway"
    EVENT = "event"
    TASK = "task"
    LANE = "lane"
    PROCESS = "process"
    OTHER = ""


class FlowKind(str, Enum):
    """Flow edge kinds."""

    SEQUENCE = "sequenceFlow"
    MESSAGE = "messageFlow"


class DiagramRecord(BaseModel):
    """Base class for all diagram value records."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)


class FlowEdge(DiagramRecord):
    """Directed flow edge between two diagram nodes."""

    id: Optional[str] = Field(None, description="Edge ID")
    kind: FlowKind = Field(..., description="Sequence or message flow")
    source_ref: Optional[str] = Field(None, description="Source element ID")
    target_ref: Optional[str] = Field(None, description="Target element ID")
    name: Optional[str] = Field(None, description="Edge label")


class Element(DiagramRecord):
    """Generic diagram node."""

    id: str = Field(..., description="Element ID, unique within the document")
    tag: str = Field(..., description="Local tag name (e.g. 'startEvent')")
    kind: ElementKind = Field(..., description="Classified element kind")
    name: Optional[str] = Field(None, description="Element name/label")
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Attributes keyed by 'prefix:local' or plain name"
    )

    def attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value, or ``default`` when absent."""
        return self.attributes.get(key, default)


class Task(DiagramRecord):
    """Task, subprocess or transaction node."""

    id: str = Field(..., description="Element ID")
    name: str = Field(..., description="Task name")
    kind: ElementKind = Field(default=ElementKind.TASK, description="Element kind")
    tag: str = Field("task", description="Local tag name")
    neuron_id: str = Field(..., description="Role/neuron identifier extension attribute")
    action_id: str = Field(..., description="Action identifier extension attribute")


class Event(DiagramRecord):
    """Start, end or intermediate event."""

    id: str = Field(..., description="Element ID")
    name: str = Field(..., description="Event name")
    kind: ElementKind = Field(default=ElementKind.EVENT, description="Element kind")
    tag: str = Field(..., description="Local tag name (e.g. 'endEvent')")


class Gateway(DiagramRecord):
    """Branching/merging control node."""

    id: str = Field(..., description="Element ID")
    name: str = Field(..., description="Gateway name")
    kind: ElementKind = Field(default=ElementKind.GATEWAY, description="Element kind")
    tag: str = Field(..., description="Local tag name (e.g. 'exclusiveGateway')")


class Lane(DiagramRecord):
    """Lane (swimlane). Membership is queried separately."""

    id: Optional[str] = Field(None, description="Lane ID")
    name: str = Field(..., description="Lane name")
    process_id: Optional[str] = Field(None, description="Owning process ID")


class Pool(DiagramRecord):
    """Pool (collaboration participant)."""

    id: Optional[str] = Field(None, description="Participant ID")
    name: str = Field(..., description="Pool name")
    process_ref: Optional[str] = Field(None, description="Referenced process ID")


class Process(DiagramRecord):
    """Top-level process container."""

    id: Optional[str] = Field(None, description="Process ID")
    name: str = Field(..., description="Process name")
    start_event_ids: List[str] = Field(default_factory=list, description="Start event IDs")
    end_event_ids: List[str] = Field(default_factory=list, description="End event IDs")
    lane_ids: List[str] = Field(default_factory=list, description="Lane IDs")
