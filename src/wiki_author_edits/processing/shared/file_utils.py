"""Utilities for opening dump sources as binary streams."""

import bz2
import gzip
import logging
import zlib
from pathlib import Path
from typing import Any, Optional, Tuple, Union, BinaryIO, TextIO

import requests
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from wiki_author_edits.processing.shared.error_handling import SourceUnavailableError

logger = logging.getLogger(__name__)

# Failures of an already opened source: corrupt gzip/bz2 data, truncated
# archives and connections dropped while the response body is streamed.
READ_ERRORS = (OSError, EOFError, zlib.error, requests.RequestException, Urllib3HTTPError)


def _is_url(value: Any) -> bool:
    return isinstance(value, str) and (value.startswith("http://") or value.startswith("https://"))


def source_name(source: Any) -> str:
    """Identifier used for a source in logs and error reports."""
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, 'name', None) or f"<stream {id(source):#x}>")


def wrap_compression(file_obj: BinaryIO, file_name: str) -> BinaryIO:
    """Wrap a raw binary stream in a decompressor chosen by file extension."""
    lowered = file_name.lower()
    if lowered.endswith(".bz2"):
        logger.debug("File extension indicates bz2 compression, wrapping file object accordingly.")
        return bz2.BZ2File(file_obj, "rb")
    if lowered.endswith(".gz"):
        logger.debug("File extension indicates gzip compression, wrapping file object accordingly.")
        return gzip.GzipFile(fileobj=file_obj, mode="rb")
    return file_obj


def get_binary_stream(stream_or_path: Any, file_name: str) -> BinaryIO:
    """
    Get appropriate binary stream based on file type and compression.

    Args:
        stream_or_path: File-like object, local path or http(s) URL
        file_name: Name of the file for determining compression

    Returns:
        Binary stream suitable for reading
    """
    logger.debug(f"get_binary_stream called with stream_or_path type: {type(stream_or_path)}, file_name: {file_name}")

    if isinstance(stream_or_path, Path):
        stream_or_path = str(stream_or_path)

    if _is_url(stream_or_path):
        logger.debug(f"Input is a URL: {stream_or_path}, fetching content.")
        response = requests.get(stream_or_path, stream=True, timeout=30)
        response.raise_for_status()
        # let urllib3 undo any transfer encoding before we look at the payload
        response.raw.decode_content = True
        return wrap_compression(response.raw, file_name)

    if isinstance(stream_or_path, str):
        logger.debug(f"Input is a local file path: {stream_or_path}, opening file in binary mode.")
        # open the decompressor on the path so closing it also closes the file
        lowered = file_name.lower()
        if lowered.endswith(".bz2"):
            return bz2.open(stream_or_path, "rb")
        if lowered.endswith(".gz"):
            return gzip.open(stream_or_path, "rb")
        return open(stream_or_path, "rb")

    # Text streams expose their bytes through .buffer
    if hasattr(stream_or_path, 'encoding') and hasattr(stream_or_path, 'buffer'):
        logger.debug("Input is a text stream with buffer attribute, using underlying buffer.")
        return wrap_compression(stream_or_path.buffer, file_name)

    return wrap_compression(stream_or_path, file_name)


def open_source(source: Union[str, Path, BinaryIO, TextIO]) -> Tuple[BinaryIO, str, bool]:
    """
    Open one dump source for reading.

    Returns:
        (stream, name, should_close). Streams opened here must be closed by
        the caller; streams handed in by the caller are left open.

    Raises:
        SourceUnavailableError: the path or URL cannot be opened
    """
    name = source_name(source)
    should_close = isinstance(source, (str, Path))
    try:
        return get_binary_stream(source, name), name, should_close
    except READ_ERRORS as e:
        raise SourceUnavailableError(name, e) from e


def safe_close(stream: Optional[Union[BinaryIO, TextIO]]) -> None:
    """
    Safely close a stream, catching and logging exceptions.

    Args:
        stream: Stream to close
    """
    if stream:
        try:
            stream.close()
        except Exception as e:
            logger.warning(f"Error closing stream: {e}")
