"""
BPMN Model Tools

CLI tools for the diagram model.
"""

from bpmn_model.tools.cli import cli

__all__ = ["cli"]
