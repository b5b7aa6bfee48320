import csv
import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from wiki_author_edits.processing.shared.constants import DEFAULT_OUTPUT_FILE_NAME
from wiki_author_edits.processing.shared.error_handling import OutputSinkError


class CsvEditCountSink:
    """
    Writes the final ``username -> total`` mapping as ``username,total`` rows.

    The output directory is emptied of regular files before writing unless
    ``clear_existing`` is False. Rows are sorted by username and carry no
    header line.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        file_name: str = DEFAULT_OUTPUT_FILE_NAME,
        clear_existing: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        self.output_dir = Path(output_dir).expanduser()
        self.file_name = file_name
        self.clear_existing = clear_existing
        self.logger = logger or logging.getLogger(__name__)

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.file_name

    def write(self, totals: Mapping[str, int]) -> Path:
        """
        Deliver the mapping.

        Raises:
            OutputSinkError: the directory or file cannot be prepared or written
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            if self.clear_existing:
                self._clear_output_dir()

            with self.output_path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                for username in sorted(totals):
                    writer.writerow([username, totals[username]])
        except OSError as e:
            raise OutputSinkError(str(self.output_path), e) from e

        self.logger.info(f"Wrote {len(totals)} author totals to {self.output_path}")
        return self.output_path

    def _clear_output_dir(self) -> None:
        removed = 0
        for path in self.output_dir.iterdir():
            if path.is_file():
                path.unlink()
                removed += 1
        if removed:
            self.logger.debug(f"Removed {removed} existing files from {self.output_dir}")
