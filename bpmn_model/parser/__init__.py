"""
BPMN document parsing, indexing and traversal.
"""

from bpmn_model.parser.classifier import classify
from bpmn_model.parser.diagram import DiagramModel, DiagramState
from bpmn_model.parser.element_index import ElementIndex, referenced_ids, to_element
from bpmn_model.parser.flow_index import FlowIndex
from bpmn_model.parser.lanes import LaneExtractor, extract_processes
from bpmn_model.parser.loader import DocumentLoader
from bpmn_model.parser.succession import SuccessionWalker

__all__ = [
    "DiagramModel",
    "DiagramState",
    "DocumentLoader",
    "ElementIndex",
    "FlowIndex",
    "LaneExtractor",
    "SuccessionWalker",
    "classify",
    "extract_processes",
    "referenced_ids",
    "to_element",
]
