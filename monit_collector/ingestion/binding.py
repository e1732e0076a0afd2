"""
Field Binding

Copies values out of a parsed element tree into the contract dataclasses,
following the WireLocation each field declares.

RULES:
======
1. Missing element or attribute -> zero value of the field
2. Empty element -> zero value of the field (presence flags still record it)
3. Text that does not convert -> DecodeError (never a silent zero)
"""

from __future__ import annotations
from dataclasses import fields
from typing import Optional
import xml.etree.ElementTree as ET

from ..contracts.base import ErrorCode
from ..contracts.document import WireLocation
from .decoder import DecodeError


def bind(cls: type, element: ET.Element):
    """Build an instance of `cls` from `element`."""
    values = {}
    for f in fields(cls):
        location = f.metadata.get('wire')
        if location is None:
            continue
        values[f.name] = _read(location, element)
    return cls(**values)


def _read(location: WireLocation, element: ET.Element):
    if location.present:
        return element.find(location.path) is not None

    if location.many:
        return tuple(
            bind(location.nested, child)
            for child in element.iterfind(location.path)
        )

    if location.nested is not None:
        child = element.find(location.path)
        if child is None:
            return location.nested()
        return bind(location.nested, child)

    return _convert(location, element, _locate_text(location, element))


def _locate_text(location: WireLocation, element: ET.Element) -> Optional[str]:
    if location.attr:
        value = element.get(location.path)
        if value is None and location.element_fallback:
            value = _child_text(element, location.path)
        return value

    value = _child_text(element, location.path)
    if value is None and location.text_fallback:
        value = _own_text(element).strip() or None
    return value


def _own_text(element: ET.Element) -> str:
    """Character data directly inside `element`, excluding its children's text."""
    return (element.text or '') + ''.join(child.tail or '' for child in element)


def _child_text(element: ET.Element, path: str) -> Optional[str]:
    child = element.find(path)
    if child is None:
        return None
    return child.text or ''


def _convert(location: WireLocation, element: ET.Element, text: Optional[str]):
    if text is None:
        return location.convert()
    if location.convert is str:
        return text

    stripped = text.strip()
    if not stripped:
        return location.convert()

    try:
        return location.convert(stripped)
    except ValueError as e:
        raise DecodeError(
            ErrorCode.MALFORMED_PAYLOAD,
            f"<{element.tag}> field '{location.path}': cannot convert {stripped!r}"
        ) from e
