import logging
from logging.handlers import RotatingFileHandler

import pytest

from wiki_author_edits.wiki_utils.logging_utils import (
    APP_LOGGER_NAME,
    TqdmConsoleHandler,
    setup_logger,
)


@pytest.fixture(autouse=True)
def _reset_app_logger():
    yield
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def test_file_and_console_handlers(tmp_path):
    logger = setup_logger(tmp_path / "logs")

    assert logger.level == logging.INFO
    assert sorted(type(h).__name__ for h in logger.handlers) == ["RotatingFileHandler", "TqdmConsoleHandler"]
    logger.info("Completed a.xml [ok]")
    for handler in logger.handlers:
        handler.flush()
    assert "Completed a.xml [ok]" in (tmp_path / "logs" / "wiki_author_edits.log").read_text(encoding="utf-8")


def test_repeated_setup_replaces_handlers(tmp_path):
    setup_logger(tmp_path)
    logger = setup_logger(tmp_path, log_file="second.log")

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(logger.handlers) == 2
    assert file_handlers[0].baseFilename.endswith("second.log")


def test_debug_raises_verbosity_and_request_logging(tmp_path):
    setup_logger(tmp_path)
    assert logging.getLogger("urllib3").level == logging.WARNING

    logger = setup_logger(tmp_path, debug=True)
    assert logger.level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.DEBUG


def test_console_output_goes_through_tqdm(capsys):
    handler = TqdmConsoleHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    handler.emit(logging.makeLogRecord({"levelname": "INFO", "msg": "3 sources queued"}))
    assert "INFO 3 sources queued" in capsys.readouterr().err
