"""
Document loading.

Parses BPMN payloads (file path, text or bytes) into an lxml tree. All
entry points funnel into ``DocumentLoader._parse`` so equivalent content
always produces the same tree.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from bpmn_model.errors import MalformedDocumentError
from bpmn_model.parser.tags import TAG_ROOT

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Parses raw BPMN markup into a ``definitions`` root element."""

    def __init__(self, namespace: str):
        self.namespace = namespace

    @staticmethod
    def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
        return etree.XMLParser(
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
            huge_tree=False,
        )

    def parse_file(self, path: Union[str, Path]) -> etree._Element:
        """Parse a document from a file path.

        Raises:
            OSError: If the file cannot be read
            MalformedDocumentError: If the content is not a BPMN document
        """
        with open(path, "rb") as f:
            payload = f.read()
        return self._parse(payload, self._make_parser(), source=str(path))

    def parse_text(self, data: str) -> etree._Element:
        """Parse a document from text; the prolog encoding is ignored."""
        try:
            payload = data.encode("utf-8")
        except UnicodeError as e:
            raise MalformedDocumentError(f"Cannot encode document: {e}", source="<text>") from e
        return self._parse(payload, self._make_parser("utf-8"), source="<text>")

    def parse_bytes(self, data: bytes) -> etree._Element:
        """Parse a document from raw bytes."""
        return self._parse(bytes(data), self._make_parser(), source="<bytes>")

    def _parse(self, payload: bytes, parser: etree.XMLParser, source: str) -> etree._Element:
        try:
            root = etree.fromstring(payload, parser=parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            raise MalformedDocumentError(f"Cannot parse document: {e}", source=source) from e

        if root is None:
            raise MalformedDocumentError("Document is empty", source=source)

        tag = etree.QName(root)
        if tag.localname != TAG_ROOT or tag.namespace != self.namespace:
            raise MalformedDocumentError(
                f"Root element must be '{TAG_ROOT}' in namespace {self.namespace}, got {tag.text}",
                source=source,
            )

        logger.debug(f"Parsed document from {source} ({len(payload)} bytes)")
        return root
