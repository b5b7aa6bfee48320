"""Incremental XML tokenizer producing start/end/text events.

lxml's feed parser drives a small target object, so a dump of any size is
consumed in fixed-size chunks and no element tree is ever built.
"""
from typing import Iterator, List, NamedTuple, Optional, Union, BinaryIO, TextIO

from lxml import etree

from wiki_author_edits.processing.shared.constants import DEFAULT_CHUNK_SIZE
from wiki_author_edits.processing.shared.error_handling import MalformedStreamError, SourceUnavailableError
from wiki_author_edits.processing.shared.file_utils import READ_ERRORS


START = "start"
END = "end"
TEXT = "text"


class XmlEvent(NamedTuple):
    kind: str
    name: Optional[str] = None
    text: Optional[str] = None


def local_name(tag: str) -> str:
    """Strip a ``{namespace-uri}`` prefix from an lxml tag name."""
    return tag.rpartition('}')[2]


class _EventCollector:
    """lxml parser target that buffers events between two feed() calls."""

    def __init__(self):
        self.events: List[XmlEvent] = []

    def start(self, tag, attrib):
        self.events.append(XmlEvent(START, local_name(tag)))

    def end(self, tag):
        self.events.append(XmlEvent(END, local_name(tag)))

    def data(self, data):
        self.events.append(XmlEvent(TEXT, text=data))

    def close(self):
        return None

    def drain(self) -> List[XmlEvent]:
        events, self.events = self.events, []
        return events


def iter_xml_events(
    stream: Union[BinaryIO, TextIO],
    source: str = "<stream>",
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[XmlEvent]:
    """
    Tokenize an XML stream lazily.

    Args:
        stream: Binary (preferred) or text stream positioned at the document start
        source: Source identifier used in error reports
        chunk_size: Number of bytes/characters read per step

    Yields:
        XmlEvent tuples in document order

    Raises:
        MalformedStreamError: on a parser-level syntax error or truncated
            document. Every event preceding the failure is yielded first.
        SourceUnavailableError: the stream itself fails while being read
            (corrupt compressed data, dropped connection).
    """
    collector = _EventCollector()
    parser = etree.XMLParser(target=collector, huge_tree=True, resolve_entities=False)
    try:
        while True:
            try:
                chunk = stream.read(chunk_size)
            except READ_ERRORS as e:
                raise SourceUnavailableError(source, e) from e
            if not chunk:
                break
            # str chunks are already decoded; lxml then ignores the encoding declaration
            parser.feed(chunk)
            yield from collector.drain()
        parser.close()
        yield from collector.drain()
    except etree.XMLSyntaxError as e:
        yield from collector.drain()
        raise MalformedStreamError(source, e) from e
