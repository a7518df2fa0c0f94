import json

import pytest
import structlog

from moneybook.errors import ValidationError
from moneybook.log import configure_logging
from moneybook.store import LedgerStore


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def last_json_line(out):
    return json.loads(out.strip().splitlines()[-1])


def test_json_logging_includes_fields(capsys):
    configure_logging("INFO", json=True)
    structlog.get_logger("tests").info("record_applied", amount=5.0)

    line = last_json_line(capsys.readouterr().out)
    assert line["event"] == "record_applied"
    assert line["level"] == "info"
    assert line["amount"] == 5.0
    assert "timestamp" in line


def test_level_filtering(capsys):
    configure_logging("WARNING", json=True)
    log = structlog.get_logger("tests")
    log.info("hidden")
    log.warning("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert last_json_line(out)["event"] == "shown"


def test_unknown_level_falls_back_to_info(capsys):
    configure_logging("chatty", json=True)
    structlog.get_logger("tests").debug("hidden")
    structlog.get_logger("tests").info("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out


def test_store_logs_rejections(capsys):
    configure_logging("INFO", json=True)
    store = LedgerStore()
    with pytest.raises(ValidationError):
        store.create_account("   ")

    line = last_json_line(capsys.readouterr().out)
    assert line["event"] == "validation_failed"
    assert line["level"] == "warning"
    assert line["operation"] == "create_account"
    assert line["reason"] == "Account name is required"
