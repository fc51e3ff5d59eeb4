"""Document-order parser events over ElementTree's pull parser."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Union

from sapling.exceptions import InvalidXMLError
from sapling.namespaces import local_name


@dataclass(frozen=True)
class StartElement:
    name: str


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class Characters:
    text: str


Event = Union[StartElement, EndElement, Characters]


class EventReader:
    """A cursor over the events of one XML document.

    The whole input is parsed before the first event is available, so a
    malformed document fails here, before any value has been built.

    Args:
        xml_input: XML document as a string or bytes

    Raises:
        InvalidXMLError: If the input is not well-formed XML

    Example:
        >>> reader = EventReader("<a>1</a>")
        >>> reader.advance()
        StartElement(name='a')
        >>> reader.advance()
        Characters(text='1')
        >>> reader.advance()
        EndElement(name='a')
        >>> reader.has_next()
        False
    """

    def __init__(self, xml_input: str | bytes):
        self._events = _parse(xml_input)
        self._position = 0

    def has_next(self) -> bool:
        return self._position < len(self._events)

    def peek(self) -> Event | None:
        """Return the next event without consuming it."""
        if not self.has_next():
            return None
        return self._events[self._position]

    def advance(self) -> Event:
        """Consume and return the next event."""
        if not self.has_next():
            raise IndexError("No more events")
        event = self._events[self._position]
        self._position += 1
        return event


def _parse(xml_input: str | bytes) -> list[Event]:
    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        parser.feed(xml_input)
        parser.close()
        # Syntax errors found during feed() are queued and re-raised here.
        raw_events = list(parser.read_events())
    except ET.ParseError as e:
        raise InvalidXMLError(f"Invalid XML input: {e}", xml_input) from e

    # Everything is parsed by now, so .text and .tail are complete when read.
    events: list[Event] = []
    depth = 0
    for kind, element in raw_events:
        name = local_name(element.tag)
        if kind == "start":
            depth += 1
            events.append(StartElement(name))
            if element.text:
                events.append(Characters(element.text))
        else:
            depth -= 1
            events.append(EndElement(name))
            # Tail text belongs to the enclosing element.
            if element.tail and depth > 0:
                events.append(Characters(element.tail))

    if not events:
        raise InvalidXMLError("Invalid XML input: no root element", xml_input)
    return events
