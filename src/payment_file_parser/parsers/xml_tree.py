"""Generic XML tree construction and dotted-path access.

Documents are parsed with lxml and converted into plain nested structures:

* element names lose their namespace prefix
* attributes are stored under ``@name``
* text of an element that also has attributes or children is stored under
  ``#text``; a bare leaf element becomes its text string
* repeated sibling elements become a list

Values stay strings; nothing is converted to numbers.
"""

from typing import Any, Dict, List, Optional, Sequence

from lxml import etree


ParsedTree = Dict[str, Any]

TEXT_KEY = '#text'
ATTRIBUTE_PREFIX = '@'


def _xml_parser() -> etree.XMLParser:
    # A parser instance per call; lxml parsers are not safe to share across threads.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def build_tree(data: bytes) -> ParsedTree:
    """Parse XML bytes into a ParsedTree keyed by the root element name.

    Raises:
        lxml.etree.XMLSyntaxError: If the document is not well-formed
    """
    root = etree.fromstring(data, _xml_parser())
    return {etree.QName(root).localname: element_to_value(root)}


def element_to_value(element) -> Any:
    """Convert one element and its subtree"""
    value: Dict[str, Any] = {}

    for name, attr_value in element.attrib.items():
        value[ATTRIBUTE_PREFIX + etree.QName(name).localname] = attr_value

    for child in element:
        if not isinstance(child.tag, str):
            continue
        name = etree.QName(child).localname
        child_value = element_to_value(child)
        if name not in value:
            value[name] = child_value
        elif isinstance(value[name], list):
            value[name].append(child_value)
        else:
            value[name] = [value[name], child_value]

    text = (element.text or '').strip()
    if not value:
        return text
    if text:
        value[TEXT_KEY] = text
    return value


def get_path(node: Any, path: str) -> Optional[Any]:
    """Follow a dotted path such as ``IntrBkSttlmAmt.@Ccy``.

    Returns None as soon as a component is missing. ``#text`` on a bare
    leaf returns the leaf itself, so amounts without a currency attribute
    still resolve.
    """
    if not path:
        return node

    for part in path.split('.'):
        if isinstance(node, dict) and part in node:
            node = node[part]
        elif part == TEXT_KEY and isinstance(node, str):
            continue
        else:
            return None
    return node


def get_text(node: Any, path: str = '') -> str:
    """Text found at a path, or an empty string when absent or structured"""
    value = get_path(node, path)
    return node_text(value)


def node_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY, '')
        return text if isinstance(text, str) else ''
    if isinstance(value, list):
        return ' '.join(text for text in (node_text(item) for item in value) if text)
    return ''


def as_list(value: Any) -> List[Any]:
    """Normalize an element that may occur once or many times"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def format_address(address: Any, components: Sequence[str]) -> str:
    """Join the present parts of a postal address with ", "

    >>> format_address({'StrtNm': 'Main St', 'TwnNm': 'Springfield', 'Ctry': 'US'},
    ...                ('StrtNm', 'BldgNb', 'PstCd', 'TwnNm', 'DstrctNm', 'Ctry'))
    'Main St, Springfield, US'
    """
    if not isinstance(address, dict):
        return ''
    parts = [get_text(address, component) for component in components]
    return ', '.join(part for part in parts if part)
