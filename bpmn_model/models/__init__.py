"""
Diagram value records.
"""

from bpmn_model.models.diagram import (
    DiagramRecord,
    Element,
    ElementKind,
    Event,
    FlowEdge,
    FlowKind,
    Gateway,
    Lane,
    Pool,
    Process,
    Task,
)

__all__ = [
    "DiagramRecord",
    "Element",
    "ElementKind",
    "Event",
    "FlowEdge",
    "FlowKind",
    "Gateway",
    "Lane",
    "Pool",
    "Process",
    "Task",
]
