import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from wiki_author_edits.processing.aggregation.edit_aggregator import EditCountAggregator
from wiki_author_edits.processing.parser.base_parser import Source
from wiki_author_edits.processing.parser.xml_parser import AuthorEditParser
from wiki_author_edits.processing.shared.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_NAMESPACE,
    DEFAULT_NAMESPACE_TAG,
    DEFAULT_RECORD_TAG,
    DEFAULT_USERNAME_TAG,
    SOURCE_STATUS,
)
from wiki_author_edits.processing.shared.error_handling import (
    ErrorHandler,
    MalformedStreamError,
    OutputSinkError,
    SourceUnavailableError,
)
from wiki_author_edits.processing.shared.file_utils import open_source, safe_close, source_name


@dataclass
class SourceStats:
    source: str
    pages: int = 0
    kept_pages: int = 0
    pairs: int = 0
    extraction_misses: int = 0
    status: str = SOURCE_STATUS['OK']
    error: Optional[str] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time


@dataclass
class ProcessingStats:
    sources: List[SourceStats] = field(default_factory=list)
    failed_sources: int = 0
    authors: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def pairs(self) -> int:
        return sum(s.pairs for s in self.sources)

    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time


class AuthorEditOrchestrator:
    """
    Counts edits per author across a set of dump sources.

    Every source is parsed on its own worker with its own parser and local
    partial sums. Partials are merged once, on the calling thread, after all
    workers have finished. A failing source is reported and contributes the
    pairs it produced before failing; it never stops its siblings.
    """

    def __init__(self, components: dict, config: Optional[dict] = None):
        config = config or {}
        self.sink = components.get('sink')
        self.discoverer = components.get('discoverer')
        self.logger = components.get('logger') or logging.getLogger(__name__)
        self.error_handler = components.get('error_handler') or ErrorHandler(self.logger)

        self.namespace = int(config.get('namespace', DEFAULT_NAMESPACE))
        self.record_tag = config.get('record_tag', DEFAULT_RECORD_TAG)
        self.namespace_tag = config.get('namespace_tag', DEFAULT_NAMESPACE_TAG)
        self.username_tag = config.get('username_tag', DEFAULT_USERNAME_TAG)
        self.chunk_size = config.get('chunk_size', DEFAULT_CHUNK_SIZE)
        self.max_workers = max(1, int(config.get('max_workers', 1)))
        self.show_progress = config.get('show_progress', False)

        self.last_stats: Optional[ProcessingStats] = None
        self._validate_components()

    def _validate_components(self):
        """Validate optional collaborators expose the interfaces used here"""
        if self.discoverer is not None and not hasattr(self.discoverer, 'discover_local_files'):
            raise ValueError("Discoverer must implement discover_local_files()")
        if self.sink is not None and not hasattr(self.sink, 'write'):
            raise ValueError("Sink must implement write()")

    def _make_parser(self) -> AuthorEditParser:
        return AuthorEditParser(
            namespace=self.namespace,
            record_tag=self.record_tag,
            namespace_tag=self.namespace_tag,
            username_tag=self.username_tag,
            chunk_size=self.chunk_size,
            logger=self.logger,
        )

    def process_source(self, source: Source) -> Tuple[Counter, SourceStats]:
        """Run one source through parsing, filtering and extraction."""
        stats = SourceStats(source=source_name(source))
        parser = self._make_parser()
        partial: Counter = Counter()
        stream = None
        close = False

        try:
            stream, stats.source, close = open_source(source)
            # accumulate in place so pairs read before a failure are kept
            for username, increment in parser.parse_stream(stream, stats.source):
                partial[username] += increment
        except SourceUnavailableError as e:
            stats.status = SOURCE_STATUS['UNAVAILABLE']
            self._handle_source_error(e, stats)
        except MalformedStreamError as e:
            stats.status = SOURCE_STATUS['MALFORMED']
            self._handle_source_error(e, stats)
        except Exception as e:
            stats.status = SOURCE_STATUS['FAILED']
            self._handle_source_error(e, stats)
        finally:
            if close:
                safe_close(stream)

        stats.pages = parser.stats['pages']
        stats.kept_pages = parser.stats['kept_pages']
        stats.extraction_misses = parser.stats['extraction_misses']
        stats.pairs = sum(partial.values())
        stats.end_time = time.time()
        self._log_completion(stats)
        return partial, stats

    def aggregate(self, sources: Sequence[Source]) -> Dict[str, int]:
        """Fan sources out to the worker pool and merge their partial sums."""
        run_stats = ProcessingStats()
        partials: List[Counter] = []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, max(1, len(sources)))) as executor:
            futures = {executor.submit(self.process_source, source): source for source in sources}
            with tqdm(
                total=len(futures), unit='file', desc="Parsing dumps",
                disable=not self.show_progress
            ) as bar:
                for future in as_completed(futures):
                    partial, source_stats = future.result()
                    partials.append(partial)
                    run_stats.sources.append(source_stats)
                    if source_stats.status != SOURCE_STATUS['OK']:
                        run_stats.failed_sources += 1
                    bar.update(1)

        # all workers are done here; this is the only cross-worker merge
        aggregator = EditCountAggregator()
        for partial in partials:
            aggregator.merge(partial)
        totals = aggregator.totals()
        run_stats.authors = len(totals)
        run_stats.end_time = time.time()
        self.last_stats = run_stats
        self.logger.info(
            f"Aggregated {run_stats.pairs} edits by {run_stats.authors} authors "
            f"from {len(sources)} sources ({run_stats.failed_sources} failed) "
            f"in {run_stats.duration():.2f}s"
        )
        return totals

    def run(self, sources: Optional[Sequence[Source]] = None) -> Dict[str, int]:
        """
        End-to-end run: discover sources, aggregate, deliver to the sink.

        Returns:
            The ``username -> total`` mapping, empty when there was no input.

        Raises:
            OutputSinkError: the result could not be written
        """
        if sources is None:
            sources = self.discoverer.discover_local_files() if self.discoverer else []
        sources = list(sources)

        if not sources:
            self.logger.warning("No input sources found, nothing to do")
            self.last_stats = ProcessingStats(end_time=time.time())
            return {}

        totals = self.aggregate(sources)

        if self.sink is not None:
            try:
                self.sink.write(totals)
            except OutputSinkError as e:
                self.error_handler.handle(e, ErrorHandler.create_context(
                    component="AuthorEditOrchestrator.run",
                    item_id=e.destination,
                    metadata={'authors': len(totals)}
                ))
                raise
        return totals

    def _handle_source_error(self, error: Exception, stats: SourceStats) -> None:
        stats.error = str(error)
        self.error_handler.handle(error, ErrorHandler.create_context(
            component="AuthorEditOrchestrator.process_source",
            item_id=stats.source,
            metadata={'status': stats.status}
        ))

    def _log_completion(self, stats: SourceStats) -> None:
        duration = stats.duration() or 1e-9
        self.logger.info(
            f"Completed {stats.source} [{stats.status}]: "
            f"{stats.pages} pages, {stats.kept_pages} in namespace {self.namespace}, "
            f"{stats.pairs} edits counted, {stats.extraction_misses} without username, "
            f"{duration:.2f}s ({stats.pages / duration:.1f} pages/sec)"
        )
