# processing/parser/base_parser.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Iterable, Optional, Union, BinaryIO, TextIO, Any
import logging

from wiki_author_edits.processing.shared.error_handling import AuthorEditsError
from wiki_author_edits.processing.shared.file_utils import open_source, safe_close

Source = Union[str, Path, BinaryIO, TextIO]


class BaseParser(ABC):
    """Abstract base class for dump parsers implementing parse_stream."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize parser with optional logger."""
        self.logger = logger or logging.getLogger(__name__)
        self.stats = {"processed": 0, "skipped": 0, "errors": 0}

    @abstractmethod
    def parse_stream(
        self,
        stream: Union[TextIO, BinaryIO],
        file_name: str,
        sample_limit: Optional[int] = None
    ) -> Iterator[Any]:
        """
        Parse a file stream, yielding records.

        Args:
            stream: File-like object to read from
            file_name: Name of the source (for logging and error reports)
            sample_limit: Optional maximum number of records to yield

        Returns:
            Iterator of parsed records
        """
        raise NotImplementedError

    def parse_from_files(
        self,
        files: Iterable[Source],
        sample_limit: Optional[int] = None
    ) -> Iterator[Any]:
        """
        Parse multiple sources one after another.

        A source that cannot be opened or breaks off mid-stream is logged and
        counted in ``stats['errors']``; records it produced before failing
        are kept and the next source is parsed.

        Args:
            files: Paths, URLs or open file objects
            sample_limit: Optional maximum number of records to yield overall
        """
        count = 0
        for file in files:
            stream = None
            close = False
            file_name = str(file)
            try:
                stream, file_name, close = open_source(file)
                for record in self.parse_stream(stream, file_name):
                    yield record
                    count += 1
                    if sample_limit and count >= sample_limit:
                        return
            except AuthorEditsError as e:
                self.logger.error(f"Error processing file {file_name}: {e}")
                self.stats["errors"] += 1
            finally:
                if close:
                    safe_close(stream)
