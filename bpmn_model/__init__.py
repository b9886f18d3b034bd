"""
BPMN Model: Typed, queryable models of BPMN 2.0 process diagrams

Parses BPMN 2.0 XML into immutable records (tasks, events, lanes, flows)
and reconstructs a diagram's linear execution order from its flows.
"""

# Configuration
from bpmn_model.config import ModelConfig, ReferencePolicy

# Errors
from bpmn_model.errors import (
    DiagramError,
    MalformedDocumentError,
    NonTerminatingTraversalError,
    ReferenceNotFoundError,
    StartNotFoundError,
)

# Models
from bpmn_model.models import (
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

# Parser
from bpmn_model.parser import DiagramModel, classify

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Config
    "ModelConfig",
    "ReferencePolicy",
    # Errors
    "DiagramError",
    "MalformedDocumentError",
    "NonTerminatingTraversalError",
    "ReferenceNotFoundError",
    "StartNotFoundError",
    # Models
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
    # Parser
    "DiagramModel",
    "classify",
]
