from __future__ import annotations

"""URN mapping to OASIS XML catalog conversion.

The functions here are side-effect-free: no GUI code and no disk I/O. File
access goes through the command's file-system adapter.

Input shape (written by ``bin/magento dev:urn-catalog:generate``)::

    <project>
      <component name="...">
        <resource url="urn:magento:..." location="$PROJECT_DIR$/..."/>
      </component>
    </project>

Output shape::

    <?xml version="1.0"?>
    <catalog xmlns="urn:oasis:names:tc:entity:xmlns:xml:catalog">
        <system systemId="urn:magento:..." uri="..."/>
    </catalog>
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from lxml import etree as ET

from urn_catalog_toolkit.core.exceptions import CatalogParseError
from urn_catalog_toolkit.core.models import SystemEntry

__all__ = [
    "CATALOG_NAMESPACE",
    "XML_DECLARATION",
    "parse_mapping",
    "extract_system_entries",
    "build_catalog",
    "serialize_catalog",
    "convert_mapping",
]

logger = logging.getLogger(__name__)

CATALOG_NAMESPACE = "urn:oasis:names:tc:entity:xmlns:xml:catalog"
XML_DECLARATION = '<?xml version="1.0"?>'
INDENT = "    "


def _make_parser() -> ET.XMLParser:
    # Generated files never need DTDs or external entities.
    return ET.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_mapping(xml_text: Union[str, bytes], source: Optional[Union[str, Path]] = None) -> ET._Element:
    """Parse a URN mapping document and return its root element.

    Pass bytes where possible: lxml then decodes according to the document's
    own encoding declaration.

    Raises:
        CatalogParseError: If *xml_text* is not well-formed or cannot be
            decoded. The error names *source* (or ``<string>`` when no path
            is known).
    """
    try:
        if isinstance(xml_text, str):
            # lxml rejects str input that carries an encoding declaration
            xml_text = xml_text.encode("utf-8")
        return ET.fromstring(xml_text, parser=_make_parser())
    except (ET.XMLSyntaxError, UnicodeError) as exc:
        logger.error("Parse FAIL: %s: %s", source or "<string>", exc)
        raise CatalogParseError(source or "<string>", cause=exc) from exc


def extract_system_entries(root: ET._Element) -> List[SystemEntry]:
    """Collect ``(url, location)`` pairs from ``project/component/resource``.

    Every level may be absent. Resources lacking either attribute are
    skipped. Encounter order is preserved.
    """
    entries: List[SystemEntry] = []
    if root is None or root.tag != "project":
        logger.debug("Mapping root is %r, expected 'project'; no entries", getattr(root, "tag", None))
        return entries

    for component in root.findall("component"):
        for resource in component.findall("resource"):
            url = resource.get("url")
            location = resource.get("location")
            if url is None or location is None:
                logger.debug("Skipping resource without url/location (line %s)", resource.sourceline)
                continue
            entries.append(SystemEntry(system_id=url, uri=location))
    return entries


def build_catalog(entries: Iterable[SystemEntry]) -> ET._Element:
    """Return a ``<catalog>`` element with one ``<system>`` child per entry."""
    catalog = ET.Element(f"{{{CATALOG_NAMESPACE}}}catalog", nsmap={None: CATALOG_NAMESPACE})
    for entry in entries:
        system = ET.SubElement(catalog, f"{{{CATALOG_NAMESPACE}}}system")
        system.set("systemId", entry.system_id)
        system.set("uri", entry.uri)
    return catalog


def serialize_catalog(catalog: ET._Element) -> str:
    """Serialise *catalog* with an XML declaration and 4-space indentation."""
    ET.indent(catalog, space=INDENT)
    body = ET.tostring(catalog, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}"


def convert_mapping(xml_text: Union[str, bytes], source: Optional[Union[str, Path]] = None) -> str:
    """Parse a mapping document and return the catalog XML text."""
    root = parse_mapping(xml_text, source)
    entries = extract_system_entries(root)
    logger.info("Catalog: %d system entries from %s", len(entries), source or "<string>")
    return serialize_catalog(build_catalog(entries))
