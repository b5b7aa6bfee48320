# Standard library imports
import os
from pathlib import Path

from wiki_author_edits.processing.shared.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_NAMESPACE,
    DEFAULT_NAMESPACE_TAG,
    DEFAULT_OUTPUT_FILE_NAME,
    DEFAULT_RECORD_TAG,
    DEFAULT_USERNAME_TAG,
)

# Input and output live next to the directory the job is started from
WORKING_DIR = Path.cwd()

# Directory scanned for *.xml / *.xml.gz / *.xml.bz2 dump files
INPUT_DIRECTORY_PATH = os.environ.get(
    'INPUT_DIRECTORY_PATH', str(WORKING_DIR / 'input')
)

# Directory receiving the author totals. Existing files in it are removed on each run.
OUTPUT_DIRECTORY_PATH = os.environ.get(
    'OUTPUT_DIRECTORY_PATH', str(WORKING_DIR / 'output')
)

OUTPUT_FILE_NAME = os.environ.get('OUTPUT_FILE_NAME', DEFAULT_OUTPUT_FILE_NAME)

# Kept apart from the output directory, which is emptied before writing
LOG_DIRECTORY_PATH = os.environ.get(
    'LOG_DIRECTORY_PATH', str(WORKING_DIR / 'logs')
)

# Parser configuration: which pages are counted and how markers are spelled
PARSER_CONFIG = {
    'namespace': int(os.environ.get('WIKI_NAMESPACE', DEFAULT_NAMESPACE)),
    'record_tag': DEFAULT_RECORD_TAG,
    'namespace_tag': DEFAULT_NAMESPACE_TAG,
    'username_tag': DEFAULT_USERNAME_TAG,
    'chunk_size': int(os.environ.get('PARSER_CHUNK_SIZE', DEFAULT_CHUNK_SIZE)),
}

# Worker pool for per-file parsing
PIPELINE_CONFIG = {
    'max_workers': int(os.environ.get('PIPELINE_MAX_WORKERS', min(8, os.cpu_count() or 1))),
    'show_progress': True,
}
