"""Rebuilds the serialized text of each top-level record from XML events."""
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from wiki_author_edits.processing.parser.event_tokenizer import START, END, TEXT, XmlEvent
from wiki_author_edits.processing.shared.constants import DEFAULT_RECORD_TAG


class RecorderState(Enum):
    OUTSIDE = "outside"
    INSIDE_RECORD = "inside_record"


class FragmentRecorder:
    """
    State machine turning a start/end/text event sequence into record fragments.

    Tags are written back as ``<name>`` and ``</name>``; attributes are not
    reproduced. Character data is appended exactly as the tokenizer delivered
    it. Events seen outside a record are dropped, and a record that never
    closes produces no fragment.
    """

    def __init__(self, record_tag: str = DEFAULT_RECORD_TAG):
        self.record_tag = record_tag
        self.state = RecorderState.OUTSIDE
        self._buffer: List[str] = []

    @property
    def inside_record(self) -> bool:
        return self.state is RecorderState.INSIDE_RECORD

    def feed(self, event: XmlEvent) -> Optional[str]:
        """Consume one event; return a fragment when it completes a record."""
        if self.state is RecorderState.OUTSIDE:
            if event.kind == START and event.name == self.record_tag:
                self.state = RecorderState.INSIDE_RECORD
                self._buffer = [f"<{event.name}>"]
            return None

        if event.kind == START:
            # a nested record tag is plain content here
            self._buffer.append(f"<{event.name}>")
        elif event.kind == END:
            self._buffer.append(f"</{event.name}>")
            if event.name == self.record_tag:
                fragment = "".join(self._buffer)
                self.reset()
                return fragment
        elif event.kind == TEXT:
            self._buffer.append(event.text)
        return None

    def reset(self) -> None:
        self.state = RecorderState.OUTSIDE
        self._buffer = []


def iter_fragments(events: Iterable[XmlEvent], record_tag: str = DEFAULT_RECORD_TAG) -> Iterator[str]:
    """Lazily yield completed record fragments. Each call starts from a fresh recorder."""
    recorder = FragmentRecorder(record_tag)
    for event in events:
        fragment = recorder.feed(event)
        if fragment is not None:
            yield fragment
