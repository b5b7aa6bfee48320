"""Namespace filter over serialized page fragments."""
from wiki_author_edits.processing.shared.constants import DEFAULT_NAMESPACE_TAG


def namespace_marker(namespace: int, namespace_tag: str = DEFAULT_NAMESPACE_TAG) -> str:
    return f"<{namespace_tag}>{namespace}</{namespace_tag}>"


def is_in_namespace(fragment: str, namespace: int, namespace_tag: str = DEFAULT_NAMESPACE_TAG) -> bool:
    """
    True if the fragment text contains the ``<ns>N</ns>`` marker for ``namespace``.

    This is a substring test, not an XML query: the marker matches wherever it
    occurs in the fragment, including inside unrelated descendant text.
    """
    return namespace_marker(namespace, namespace_tag) in fragment
