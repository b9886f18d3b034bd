"""
BPMN tag and attribute names, plus lxml helpers for namespace-aware access.

Tags are matched by local name inside the configured BPMN model namespace,
whatever prefix the document binds it to (``bpmn2`` for bpmn.io exports).
Vendor attributes are addressed as ``prefix:local`` and resolved through
the node's namespace map.
"""

from typing import Dict, Iterator, List, Optional

from lxml import etree

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

TAG_ROOT = "definitions"
TAG_PROCESS = "process"
TAG_SUB_PROCESS = "subProcess"
TAG_TRANSACTION = "transaction"
TAG_START_EVENT = "startEvent"
TAG_END_EVENT = "endEvent"
TAG_TASK = "task"
TAG_LANE_SET = "laneSet"
TAG_LANE = "lane"
TAG_FLOW_NODE_REF = "flowNodeRef"
TAG_DATA_INPUT_ASSOCIATION = "dataInputAssociation"
TAG_DATA_OUTPUT_ASSOCIATION = "dataOutputAssociation"

ATTR_ID = "id"
ATTR_SOURCE_REF = "sourceRef"
ATTR_TARGET_REF = "targetRef"
ATTR_NAME = "name"


def local_name(node: etree._Element) -> str:
    """Local part of an element's tag."""
    return etree.QName(node).localname


def qname(namespace: str, tag: str) -> str:
    """Clark-notation tag for ``tag`` in ``namespace``."""
    return etree.QName(namespace, tag).text


def iter_elements(node: etree._Element) -> Iterator[etree._Element]:
    """Depth-first document-order walk over elements, ``node`` included."""
    return node.iter(etree.Element)


def children(node: etree._Element, namespace: str, tag: str) -> List[etree._Element]:
    """Direct children of ``node`` with the given BPMN tag."""
    return node.findall(qname(namespace, tag))


def child(node: etree._Element, namespace: str, tag: str) -> Optional[etree._Element]:
    """First direct child of ``node`` with the given BPMN tag."""
    return node.find(qname(namespace, tag))


def child_text(node: etree._Element, tag: str) -> Optional[str]:
    """Stripped text of the first direct child with local name ``tag``."""
    for sub in node.iterchildren(etree.Element):
        if local_name(sub) == tag and sub.text and sub.text.strip():
            return sub.text.strip()
    return None


def _attribute_key(node: etree._Element, name: str) -> Optional[str]:
    if ":" not in name:
        return name
    prefix, local = name.split(":", 1)
    if prefix == "xml":
        return f"{{{XML_NAMESPACE}}}{local}"
    uri = node.nsmap.get(prefix)
    if uri is None:
        return None
    return f"{{{uri}}}{local}"


def attribute_value(
    node: etree._Element, name: str, default: Optional[str] = None
) -> Optional[str]:
    """Read an attribute by plain or ``prefix:local`` name."""
    key = _attribute_key(node, name)
    if key is None:
        return default
    return node.get(key, default)


def attribute_map(node: etree._Element) -> Dict[str, str]:
    """All attributes of ``node`` keyed by plain or ``prefix:local`` name."""
    prefixes = {uri: prefix for prefix, uri in node.nsmap.items() if prefix}
    prefixes[XML_NAMESPACE] = "xml"

    result: Dict[str, str] = {}
    for key, value in node.attrib.items():
        attr = etree.QName(key)
        if attr.namespace is None:
            result[attr.localname] = value
        else:
            prefix = prefixes.get(attr.namespace)
            result[f"{prefix}:{attr.localname}" if prefix else key] = value
    return result
