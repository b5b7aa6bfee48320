import logging
from typing import Iterator, Optional, Union, BinaryIO, TextIO

from wiki_author_edits.processing.parser.base_parser import BaseParser
from wiki_author_edits.processing.parser.event_tokenizer import iter_xml_events
from wiki_author_edits.processing.parser.fragment_recorder import iter_fragments
from wiki_author_edits.processing.parser.page_filter import is_in_namespace
from wiki_author_edits.processing.parser.username_extractor import UsernamePair, extract_username
from wiki_author_edits.processing.shared.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_NAMESPACE,
    DEFAULT_NAMESPACE_TAG,
    DEFAULT_RECORD_TAG,
    DEFAULT_USERNAME_TAG,
)


class AuthorEditParser(BaseParser):
    """Streaming parser turning a MediaWiki XML dump into (username, 1) pairs.

    Each page is rebuilt as a text fragment, kept only if it carries the
    target namespace marker, and reduced to its contributor name. Pages
    whose username cannot be isolated are counted as extraction misses.
    """

    def __init__(
        self,
        namespace: int = DEFAULT_NAMESPACE,
        record_tag: str = DEFAULT_RECORD_TAG,
        namespace_tag: str = DEFAULT_NAMESPACE_TAG,
        username_tag: str = DEFAULT_USERNAME_TAG,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(logger)
        self.namespace = namespace
        self.record_tag = record_tag
        self.namespace_tag = namespace_tag
        self.username_tag = username_tag
        self.chunk_size = chunk_size
        self.stats = {
            'pages': 0,
            'kept_pages': 0,
            'skipped_pages': 0,
            'extraction_misses': 0,
            'processed': 0,
            'errors': 0
        }

    def iter_fragments(self, stream: Union[BinaryIO, TextIO], file_name: str = "<stream>") -> Iterator[str]:
        """Yield the serialized text of every page in the stream."""
        events = iter_xml_events(stream, source=file_name, chunk_size=self.chunk_size)
        return iter_fragments(events, self.record_tag)

    def parse_stream(
        self,
        stream: Union[BinaryIO, TextIO],
        file_name: str,
        sample_limit: Optional[int] = None
    ) -> Iterator[UsernamePair]:
        """Parse one dump stream yielding a username pair per qualifying page.

        Args:
            stream: Input XML stream
            file_name: Source identifier for logs and errors
            sample_limit: Max pairs to yield

        Raises:
            MalformedStreamError: the stream has an XML syntax error. Pairs
                yielded before the error stay valid.
        """
        pairs_yielded = 0
        for fragment in self.iter_fragments(stream, file_name):
            self.stats['pages'] += 1

            if not is_in_namespace(fragment, self.namespace, self.namespace_tag):
                self.stats['skipped_pages'] += 1
                continue
            self.stats['kept_pages'] += 1

            pair = extract_username(fragment, self.username_tag)
            if pair is None:
                self.stats['extraction_misses'] += 1
                continue

            yield pair
            pairs_yielded += 1
            self.stats['processed'] += 1

            if sample_limit and pairs_yielded >= sample_limit:
                return

        self.logger.debug(
            f"Finished {file_name}: {self.stats['pages']} pages, "
            f"{self.stats['kept_pages']} in namespace {self.namespace}, "
            f"{self.stats['extraction_misses']} without a username"
        )
