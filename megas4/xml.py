# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# [2014] - [2025] MinIO, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
XML encoding and decoding functions.

Decoded documents are plain nested dictionaries: a tag maps to a leaf
string, to a dictionary of its children or, when the tag repeats under the
same parent, to a list of those values in document order. Attributes are
dropped. A tag seen once looks the same as a required single element, so
callers who expect a list must normalize with :func:`as_list`.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, TypeVar, Union

from typing_extensions import Protocol

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_OPEN_TAG_REGEX = re.compile(r"<([A-Za-z_][\w.:-]*)((?:\s[^<>]*?)?)(/?)>")
_CDATA_REGEX = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_SKIP_REGEX = re.compile(
    r"<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>", re.DOTALL | re.IGNORECASE,
)
_ENTITY_REGEX = re.compile(r"&(lt|gt|amp|quot|apos|#\d+|#x[0-9a-fA-F]+);")
_ENTITIES = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "apos": "'"}

XmlValue = Union[str, "XmlNode", list]
XmlNode = dict[str, Any]


def escape(text: str) -> str:
    """Escape XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _entity(match: re.Match) -> str:
    """Decode one entity or character reference."""
    name = match.group(1)
    try:
        if name.startswith("#x"):
            return chr(int(name[2:], 16))
        if name.startswith("#"):
            return chr(int(name[1:]))
    except (ValueError, OverflowError):
        # Code point out of range; keep reference as is.
        return match.group(0)
    return _ENTITIES[name]


def unescape(text: str) -> str:
    """Unescape XML entities; unknown entities are kept as is."""
    return _ENTITY_REGEX.sub(_entity, text)


def _find_closing_tag(
        text: str, name: str, start: int,
) -> Optional[tuple[int, int]]:
    """Find span of closing tag of name honoring nested tags of same name."""
    depth = 1
    pattern = rf"<(/?){re.escape(name)}(?:\s[^<>]*?)?(/?)>"
    for match in re.finditer(pattern, text[start:]):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return start + match.start(), start + match.end()
        elif not match.group(2):
            depth += 1
    return None


def _add_child(node: XmlNode, name: str, value: XmlValue):
    """Add value under name; repeated names collapse into a list."""
    if name not in node:
        node[name] = value
    elif isinstance(node[name], list):
        node[name].append(value)
    else:
        node[name] = [node[name], value]


def _parse_value(content: str) -> XmlValue:
    """Parse element content to either child node or leaf string."""
    if not _OPEN_TAG_REGEX.search(content):
        return unescape(content)
    node = _parse_children(content)
    return node if node else content


def _parse_children(text: str) -> XmlNode:
    """Parse sibling elements of given text."""
    node: XmlNode = {}
    pos = 0
    while True:
        match = _OPEN_TAG_REGEX.search(text, pos)
        if not match:
            break
        name = match.group(1)
        if match.group(3):
            _add_child(node, name, "")
            pos = match.end()
            continue
        span = _find_closing_tag(text, name, match.end())
        if span is None:
            # Unterminated tag; skip it and keep what can be recognized.
            pos = match.end()
            continue
        _add_child(node, name, _parse_value(text[match.end():span[0]]))
        pos = span[1]
    return node


def parse_xml(data: Union[str, bytes, None]) -> Union[XmlNode, str]:
    """
    Decode XML text into nested dictionaries.

    Empty or whitespace-only input decodes to an empty dictionary. Parsing
    is lenient: malformed parts are skipped and input without any
    recognizable element is returned verbatim.
    """
    if isinstance(data, bytes):
        data = data.decode(errors="replace")
    if not data or not data.strip():
        return {}

    text = _CDATA_REGEX.sub(lambda match: escape(match.group(1)), data)
    text = _SKIP_REGEX.sub("", text)
    node = _parse_children(text)
    return node if node else data


def _marshal(name: str, value: Any) -> str:
    """Serialize value as element(s) of given name."""
    if value is None:
        return f"<{name}/>"
    if isinstance(value, Mapping):
        if not value:
            return f"<{name}/>"
        children = "".join(
            _marshal(key, child) for key, child in value.items()
        )
        return f"<{name}>{children}</{name}>"
    if isinstance(value, (list, tuple)):
        return "".join(_marshal(name, item) for item in value)
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"<{name}>{escape(str(value))}</{name}>"


def build_xml(root_name: str, value: Any) -> bytes:
    """
    Encode value into XML document with given root element name.

    A list under a key repeats the element of that key name for each item,
    mirroring how :func:`parse_xml` collapses repeated siblings.
    """
    if isinstance(value, (list, tuple)):
        raise ValueError("root element value must not be a list")
    return (XML_DECLARATION + _marshal(root_name, value)).encode()


def as_list(value: Any) -> list:
    """Normalize a possibly repeated value to a list."""
    if value is None or value == "":
        return []
    return value if isinstance(value, list) else [value]


def findvalue(node: Any, path: str, default: Any = None) -> Any:
    """Get value at slash separated path of decoded node."""
    for name in path.split("/"):
        if not isinstance(node, dict) or name not in node:
            return default
        node = node[name]
    return node


def findtext(
    node: Any,
    path: str,
    strict: bool = False,
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Get leaf string at slash separated path of decoded node with strict
    flag raises ValueError if path does not exist.
    """
    value = findvalue(node, path)
    if value is None:
        if strict:
            raise ValueError(f"XML element <{path}> not found")
        return default
    return value if isinstance(value, str) else default


UnmarshalT = TypeVar("UnmarshalT", bound="UnmarshalProtocol")


class UnmarshalProtocol(Protocol):
    """typing stub for class with `fromdict` method"""

    @classmethod
    def fromdict(cls: type[UnmarshalT], node: XmlNode) -> UnmarshalT:
        """Create object by values from decoded XML node."""


def unmarshal(cls: type[UnmarshalT], data: Union[str, bytes]) -> UnmarshalT:
    """Unmarshal given XML data to an object of passed class."""
    node = parse_xml(data)
    return cls.fromdict(node if isinstance(node, dict) else {})
