import gzip
import io
from unittest import mock

import pytest
import requests

from wiki_author_edits.processing.shared.error_handling import SourceUnavailableError
from wiki_author_edits.processing.shared.file_utils import open_source, safe_close, source_name


def test_source_name():
    assert source_name("/data/a.xml") == "/data/a.xml"
    named = mock.Mock()
    named.name = "dump.xml"
    assert source_name(named) == "dump.xml"
    assert source_name(io.BytesIO()).startswith("<stream")


def test_open_plain_and_gzip_paths(tmp_path):
    plain = tmp_path / "a.xml"
    plain.write_bytes(b"<a/>")
    gz = tmp_path / "a.xml.gz"
    gz.write_bytes(gzip.compress(b"<b/>"))

    for path, expected in ((plain, b"<a/>"), (gz, b"<b/>")):
        stream, name, should_close = open_source(path)
        try:
            assert stream.read() == expected
            assert name == str(path)
            assert should_close
        finally:
            stream.close()


def test_caller_streams_are_not_closed():
    buffer = io.BytesIO(b"<a/>")
    stream, _, should_close = open_source(buffer)
    assert stream is buffer
    assert not should_close


def test_text_stream_uses_underlying_buffer():
    wrapper = io.TextIOWrapper(io.BytesIO(b"<a/>"), encoding="utf-8")
    stream, _, _ = open_source(wrapper)
    assert stream.read() == b"<a/>"


def test_missing_path_is_unavailable(tmp_path):
    with pytest.raises(SourceUnavailableError) as excinfo:
        open_source(tmp_path / "missing.xml")
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_failing_url_is_unavailable():
    with mock.patch("requests.get", side_effect=requests.ConnectionError("offline")):
        with pytest.raises(SourceUnavailableError):
            open_source("https://dumps.example.org/enwiki-latest-stub.xml.gz")


def test_safe_close_swallows_errors(caplog):
    broken = mock.Mock()
    broken.close.side_effect = OSError("boom")
    safe_close(broken)
    assert "Error closing stream" in caplog.text
