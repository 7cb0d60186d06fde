"""XML attribute stores.

``InMemoryXmlFile`` keeps attributes in a dict keyed by the host's
dotted key notation.  ``ElementTreeXmlFile`` exposes the same interface
over a document parsed by :mod:`xml.etree.ElementTree`, so a vehicle
XML on disk can be rewritten with the same code that runs in the game.

Key grammar::

    vehicle.combinations.combination(0)#xmlFilename
    ^ element path, (n) selects the n-th same-named child (0-based)
                                        ^ optional attribute name
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from typing import Final

_SEGMENT: Final[re.Pattern[str]] = re.compile(r"([^.()#]+)(?:\((\d+)\))?")


class XmlKeyError(ValueError):
    """Raised when a key does not follow the dotted key grammar."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Malformed XML key {key!r}")


def _split_key(key: str) -> tuple[list[tuple[str, int]], str | None]:
    path, _, attribute = key.partition("#")
    segments: list[tuple[str, int]] = []
    for part in path.split("."):
        match = _SEGMENT.fullmatch(part)
        if match is None:
            raise XmlKeyError(key)
        segments.append((match.group(1), int(match.group(2) or 0)))
    return segments, attribute or None


class InMemoryXmlFile:
    """Attribute store backed by a flat dict.

    An element key (no ``#``) exists when any attribute key starts with
    it, which is how the host answers ``hasProperty`` for containers.
    """

    def __init__(self, attributes: Mapping[str, str] | None = None) -> None:
        self._attributes: dict[str, str] = dict(attributes or {})

    def has_property(self, key: str) -> bool:
        if key in self._attributes:
            return True
        return any(
            existing.startswith(key + "#") or existing.startswith(key + ".")
            for existing in self._attributes
        )

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self._attributes.get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self._attributes[key] = value

    def to_dict(self) -> dict[str, str]:
        return dict(self._attributes)


class ElementTreeXmlFile:
    """Attribute store over an :class:`xml.etree.ElementTree.ElementTree`.

    The first key segment must name the document root.
    """

    def __init__(self, tree: ET.ElementTree, filename: str | None = None) -> None:
        self._tree = tree
        self.filename = filename

    @classmethod
    def load(cls, path: str | Path) -> "ElementTreeXmlFile":
        """Parse the XML file at *path*."""
        return cls(ET.parse(path), filename=str(path))

    @classmethod
    def from_string(cls, text: str) -> "ElementTreeXmlFile":
        return cls(ET.ElementTree(ET.fromstring(text)))

    def _find(self, segments: list[tuple[str, int]]) -> ET.Element | None:
        root = self._tree.getroot()
        (root_name, root_index), rest = segments[0], segments[1:]
        if root.tag != root_name or root_index != 0:
            return None
        node = root
        for name, index in rest:
            children = node.findall(name)
            if index >= len(children):
                return None
            node = children[index]
        return node

    def has_property(self, key: str) -> bool:
        segments, attribute = _split_key(key)
        node = self._find(segments)
        if node is None:
            return False
        return attribute is None or attribute in node.attrib

    def get_string(self, key: str, default: str | None = None) -> str | None:
        segments, attribute = _split_key(key)
        node = self._find(segments)
        if node is None:
            return default
        if attribute is None:
            return node.text if node.text is not None else default
        return node.attrib.get(attribute, default)

    def set_string(self, key: str, value: str) -> None:
        """Set an attribute (or element text) on an existing element.

        Raises
        ------
        KeyError
            If the element addressed by *key* does not exist.
        """
        segments, attribute = _split_key(key)
        node = self._find(segments)
        if node is None:
            raise KeyError(f"No element for key {key!r}")
        if attribute is None:
            node.text = value
        else:
            node.set(attribute, value)

    def to_string(self) -> str:
        return ET.tostring(self._tree.getroot(), encoding="unicode")

    def save(self, path: str | Path | None = None) -> None:
        """Write the document back to *path*, or to the file it was loaded from."""
        target = path or self.filename
        if target is None:
            raise ValueError("No target path: document was not loaded from a file")
        self._tree.write(target, encoding="utf-8", xml_declaration=True)
