#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from wiki_author_edits.config.settings import (
    INPUT_DIRECTORY_PATH,
    LOG_DIRECTORY_PATH,
    OUTPUT_DIRECTORY_PATH,
    OUTPUT_FILE_NAME,
    PARSER_CONFIG,
    PIPELINE_CONFIG,
)
from wiki_author_edits.processing.orchestrator import AuthorEditOrchestrator
from wiki_author_edits.processing.output.csv_sink import CsvEditCountSink
from wiki_author_edits.processing.shared.error_handling import ErrorHandler, OutputSinkError
from wiki_author_edits.wiki_io.file_discoverer import FileDiscoverer
from wiki_author_edits.wiki_utils.logging_utils import setup_logger

EXIT_OK = 0
EXIT_OUTPUT_FAILED = 1
EXIT_INTERRUPTED = 130


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Count edits per registered author in MediaWiki XML dumps'
    )
    parser.add_argument('inputs', nargs='*',
                        help='Dump files or URLs to read (default: scan --input-dir)')
    parser.add_argument('-i', '--input-dir', default=INPUT_DIRECTORY_PATH,
                        help='Directory scanned for *.xml, *.xml.gz and *.xml.bz2 files')
    parser.add_argument('-o', '--output-dir', default=OUTPUT_DIRECTORY_PATH,
                        help='Directory receiving the CSV result (emptied first)')
    parser.add_argument('--output-file', default=OUTPUT_FILE_NAME,
                        help='Name of the CSV file inside the output directory')
    parser.add_argument('-n', '--namespace', type=int, default=PARSER_CONFIG['namespace'],
                        help='Page namespace to count (default: 0, articles)')
    parser.add_argument('-j', '--workers', type=int, default=PIPELINE_CONFIG['max_workers'],
                        help='Number of dump files parsed in parallel')
    parser.add_argument('--log-dir', default=LOG_DIRECTORY_PATH, help='Log directory')
    parser.add_argument('--no-clear', action='store_true',
                        help='Keep existing files in the output directory')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    parser.add_argument('--debug', action='store_true', help='Verbose logging with tracebacks')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logger = setup_logger(Path(args.log_dir), debug=args.debug)

    config = dict(PARSER_CONFIG)
    config.update(PIPELINE_CONFIG)
    config.update({
        'namespace': args.namespace,
        'max_workers': args.workers,
        'show_progress': PIPELINE_CONFIG['show_progress'] and not args.no_progress,
    })

    components = {
        'discoverer': FileDiscoverer(args.input_dir, logger=logger.getChild('discoverer')),
        'sink': CsvEditCountSink(
            args.output_dir,
            file_name=args.output_file,
            clear_existing=not args.no_clear,
            logger=logger.getChild('sink'),
        ),
        'logger': logger,
        'error_handler': ErrorHandler(logger.getChild('errors'), debug=args.debug),
    }
    orchestrator = AuthorEditOrchestrator(components, config)

    try:
        orchestrator.run(args.inputs or None)
    except OutputSinkError as e:
        logger.critical(f"Run failed, no output written: {e}")
        return EXIT_OUTPUT_FAILED
    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
