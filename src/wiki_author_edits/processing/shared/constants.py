"""
Shared constants across the author edit counting pipeline.
Only for values used across multiple components.
"""

# Element that delimits one article record in a MediaWiki export
DEFAULT_RECORD_TAG = "page"

# Element holding the integer namespace of a page
DEFAULT_NAMESPACE_TAG = "ns"

# Element holding a registered contributor name. Anonymous edits carry <ip> instead.
DEFAULT_USERNAME_TAG = "username"

# Main/article namespace
DEFAULT_NAMESPACE = 0

# Bytes handed to the incremental XML parser per feed() call
DEFAULT_CHUNK_SIZE = 64 * 1024

# File name suffixes accepted as dump sources
XML_SOURCE_SUFFIXES = (".xml", ".xml.gz", ".xml.bz2")

DEFAULT_OUTPUT_FILE_NAME = "author_edits.csv"

# Values of SourceStats.status
SOURCE_STATUS = {
    'OK': 'ok',
    'UNAVAILABLE': 'unavailable',
    'MALFORMED': 'malformed',
    'FAILED': 'failed',
}
