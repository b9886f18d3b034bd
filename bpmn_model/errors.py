"""
Diagram Model Errors

Exception hierarchy raised by the diagram loader, the succession walk
and the façade when the reference policy is strict.
"""

from typing import List, Optional, Sequence


class DiagramError(Exception):
    """Base class for all diagram model errors."""


class MalformedDocumentError(DiagramError):
    """Raised when a payload cannot be parsed as a BPMN document."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message)


class StartNotFoundError(DiagramError):
    """Raised when no flow edge leaves a process start event."""


class ReferenceNotFoundError(DiagramError):
    """Raised when an edge or lane references an ID with no element."""

    def __init__(self, reference: str, context: str = ""):
        self.reference = reference
        self.context = context
        message = f"Reference '{reference}' does not match any element"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class NonTerminatingTraversalError(DiagramError):
    """Raised when the succession walk re-enters an edge it already followed."""

    def __init__(self, path: Sequence[str]):
        self.path: List[str] = list(path)
        super().__init__(f"Flow cycle detected: {' -> '.join(self.path)}")


__all__ = [
    "DiagramError",
    "MalformedDocumentError",
    "StartNotFoundError",
    "ReferenceNotFoundError",
    "NonTerminatingTraversalError",
]
