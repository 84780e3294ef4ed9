# cloudsvc/features/web_config.py
"""
Merge named configuration sections into a web-config style XML file.

A section is injected only when the file doesn't already carry it (same
element tag under the root; for entries of <configSections>, same tag and
name attribute). Everything else in the file is kept:

- comments and processing instructions, inside the root and around it
- a leading byte order mark
- the document's own namespace prefixes (xdt:Transform stays xdt:Transform)

When the root element lives in a default namespace, injected sections are
placed in that namespace too. <configSections> is placed first under the
root when created.
"""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from cloudsvc.core.exceptions import DocumentMalformedError

CONFIG_SECTIONS = "configSections"
ROOT_TAG = "configuration"
INDENT = "  "
BOM = "\ufeff"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

# Markup allowed before and after the root element. Single-character \s keeps
# the patterns linear on long whitespace runs.
_PROLOG = re.compile(r"(?:\s|<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^\[>]*(?:\[.*?\])?\s*>)*", re.S)
_EPILOG = re.compile(r"(?:\s|<\?(?:(?!\?>).)*\?>|<!--(?:(?!-->).)*-->)*\Z", re.S)
_DECLARATION = re.compile(r"<\?xml\s.*?\?>", re.S)

# ElementTree reserves ns<N> for the prefixes it makes up.
_GENERATED_PREFIX = re.compile(r"ns\d+$")


def _parse(text: str, path: Optional[Path]) -> ET.Element:
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    try:
        parser.feed(text.encode("utf-8"))
        return parser.close()
    except ET.ParseError as e:
        raise DocumentMalformedError(f"Invalid XML: {e}", path=path) from e


def _split(text: str) -> Tuple[str, str, str]:
    """(byte order mark, markup before the root, markup after the root)"""
    bom = BOM if text.startswith(BOM) else ""
    body = text[len(bom):]

    head = _PROLOG.match(body).end()
    tail = _EPILOG.search(body, head).start()

    prolog = body[:head].strip()
    declaration = _DECLARATION.match(prolog)
    if declaration:
        prolog = prolog[declaration.end():].strip()

    return bom, prolog, body[tail:].strip()


def _declared_prefixes(text: str) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for _, (prefix, uri) in ET.iterparse(io.BytesIO(text.encode("utf-8")), events=("start-ns",)):
        found.setdefault(prefix, uri)
    return found


def _register_prefixes(prefixes: Dict[str, str]) -> None:
    # A default namespace can't be re-declared by ElementTree without
    # dragging unqualified siblings into it, so only named prefixes are kept.
    for prefix, uri in prefixes.items():
        if prefix and not _GENERATED_PREFIX.match(prefix):
            ET.register_namespace(prefix, uri)


def _local(tag) -> Optional[str]:
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _namespace(tag: str) -> Optional[str]:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else None


def _qualify(element: ET.Element, uri: str) -> None:
    for el in element.iter():
        if isinstance(el.tag, str) and not el.tag.startswith("{"):
            el.tag = f"{{{uri}}}{el.tag}"


def _append(parent: ET.Element, element: ET.Element, level: int) -> None:
    ET.indent(element, space=INDENT, level=level)
    if len(parent):
        last = parent[-1]
        element.tail = last.tail
        last.tail = "\n" + INDENT * level
    else:
        parent.text = "\n" + INDENT * level
        element.tail = "\n" + INDENT * (level - 1)
    parent.append(element)


def _prepend(parent: ET.Element, element: ET.Element, level: int) -> None:
    if not len(parent):
        _append(parent, element, level)
        return
    ET.indent(element, space=INDENT, level=level)
    element.tail = parent.text if parent.text and not parent.text.strip() else "\n" + INDENT * level
    parent.insert(0, element)


def _merge_config_sections(root: ET.Element, incoming: ET.Element) -> List[str]:
    existing = root.find(incoming.tag)
    if existing is None:
        _prepend(root, incoming, level=1)
        return [CONFIG_SECTIONS]

    injected = []
    for entry in list(incoming):
        if not isinstance(entry.tag, str):
            continue
        key = entry.get("name")
        if any(e.tag == entry.tag and e.get("name") == key for e in existing):
            continue
        _append(existing, entry, level=2)
        injected.append(f"{CONFIG_SECTIONS}/{_local(entry.tag)}[{key}]")
    return injected


def has_section(xml_text: str, tag: str) -> bool:
    return any(_local(child.tag) == tag for child in _parse(xml_text, None))


def inject_sections(
    xml_text: Optional[str],
    fragments: Sequence[str],
    path: Optional[Path] = None,
) -> Tuple[str, List[str]]:
    """
    Inject XML fragments into a config document.

    Args:
        xml_text: Current file content, or None when the file doesn't exist
        fragments: One XML element per fragment
        path: File path, for error messages

    Returns:
        (new document text, list of injected section names)

    Raises:
        DocumentMalformedError: If the document or a fragment is not valid XML
    """
    if xml_text and xml_text.strip(BOM + " \t\r\n"):
        root = _parse(xml_text, path)
        bom, prolog, epilog = _split(xml_text)
        _register_prefixes(_declared_prefixes(xml_text))
    else:
        root = ET.Element(ROOT_TAG)
        bom = prolog = epilog = ""

    namespace = _namespace(root.tag)

    injected: List[str] = []
    for fragment in fragments:
        element = _parse(fragment, None)
        if namespace:
            _qualify(element, namespace)

        if _local(element.tag) == CONFIG_SECTIONS:
            injected.extend(_merge_config_sections(root, element))
        elif root.find(element.tag) is None:
            _append(root, element, level=1)
            injected.append(_local(element.tag))

    parts = [bom, XML_DECLARATION]
    if prolog:
        parts.append(prolog + "\n")
    parts.append(ET.tostring(root, encoding="unicode") + "\n")
    if epilog:
        parts.append(epilog + "\n")
    return "".join(parts), injected
