import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from wiki_author_edits.processing.shared.constants import XML_SOURCE_SUFFIXES


class FileDiscoverer:
    """
    Lists dump files already present in a local input directory.
    """

    def __init__(
        self,
        input_dir: Union[str, Path],
        suffixes: Iterable[str] = XML_SOURCE_SUFFIXES,
        recursive: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            input_dir: Directory holding the dump files (will be expanded)
            suffixes: Accepted file name endings, compared case-insensitively
            recursive: Descend into subdirectories
            logger: Pre-configured logger instance
        """
        self.input_dir = Path(input_dir).expanduser()
        self.suffixes = tuple(s.lower() for s in suffixes)
        self.recursive = recursive
        self.logger = logger or logging.getLogger(__name__)

    def _matches(self, path: Path) -> bool:
        return path.is_file() and path.name.lower().endswith(self.suffixes)

    def discover_local_files(self) -> List[str]:
        """
        Return the accepted files in the input directory as sorted path strings.

        A missing input directory is reported and treated as empty.
        """
        if not self.input_dir.is_dir():
            self.logger.warning(f"Input directory is empty or missing: {self.input_dir}")
            return []

        candidates = self.input_dir.rglob("*") if self.recursive else self.input_dir.iterdir()
        matches = sorted(str(path) for path in candidates if self._matches(path))
        self.logger.info(f"Found {len(matches)} dump files in {self.input_dir}")
        return matches
