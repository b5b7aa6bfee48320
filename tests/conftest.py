import logging

import pytest

from tests.dump_builder import make_dump, make_page


@pytest.fixture
def logger():
    return logging.getLogger("wiki_author_edits.tests")


@pytest.fixture
def write_dump(tmp_path):
    """Write a dump file under tmp_path/input and return its path."""
    input_dir = tmp_path / "input"
    input_dir.mkdir(exist_ok=True)

    def _write(name, pages=None, content=None):
        path = input_dir / name
        path.write_text(content if content is not None else make_dump(pages or []), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scenario_sources(write_dump):
    """Two dumps: A holds Alice/Bob in ns 0 and Carol in ns 1, B holds Alice in ns 0."""
    source_a = write_dump("a.xml", [
        make_page("One", ns=0, username="Alice", page_id=1),
        make_page("Two", ns=0, username="Bob", page_id=2),
        make_page("Talk:Three", ns=1, username="Carol", page_id=3),
    ])
    source_b = write_dump("b.xml", [
        make_page("Four", ns=0, username="Alice", page_id=4),
    ])
    return [source_a, source_b]
