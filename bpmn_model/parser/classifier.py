"""
Element classification by tag name.
"""

from typing import Union

from lxml import etree

from bpmn_model.models.diagram import ElementKind
from bpmn_model.parser.tags import TAG_LANE, TAG_PROCESS, TAG_SUB_PROCESS, TAG_TASK, TAG_TRANSACTION

TASK_TAGS = frozenset({TAG_SUB_PROCESS, TAG_TRANSACTION, TAG_TASK})


def _local(tag: str) -> str:
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


def classify(node: Union[str, etree._Element]) -> ElementKind:
    """Map a tag name (or an element's tag) to its element kind.

    Accepts a plain local name, a Clark-notation tag or a ``prefix:local``
    name. Only the tag is inspected.

    Args:
        node: Tag name or lxml element

    Returns:
        ElementKind, ``ElementKind.OTHER`` for unrecognized tags
    """
    tag = _local(node if isinstance(node, str) else etree.QName(node).text)

    if tag.endswith("Gateway"):
        return ElementKind.GATEWAY
    if tag.endswith("Event"):
        return ElementKind.EVENT
    if tag in TASK_TAGS:
        return ElementKind.TASK
    if tag == TAG_LANE:
        return ElementKind.LANE
    if tag == TAG_PROCESS:
        return ElementKind.PROCESS
    return ElementKind.OTHER
