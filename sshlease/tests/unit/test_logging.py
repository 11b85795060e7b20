import json

import pytest
import structlog

from sshlease.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def _last_line(capsys: pytest.CaptureFixture[str]) -> str:
    err = capsys.readouterr().err.strip().splitlines()
    assert err, "expected a log line on stderr"
    return err[-1]


def test_json_log_lines_carry_component_and_msg(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("info")
    structlog.get_logger("sshlease.lease").info("lease_config_written", lease="1h0m0s")

    record = json.loads(_last_line(capsys))
    assert record["msg"] == "lease_config_written"
    assert record["component"] == "sshlease.lease"
    assert record["level"] == "info"
    assert record["lease"] == "1h0m0s"
    assert "ts" in record


def test_explicit_component_is_kept(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("info")
    structlog.get_logger("sshlease.cli").info("server_fault", component="storage")

    assert json.loads(_last_line(capsys))["component"] == "storage"


def test_level_filtering(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("warning")
    log = structlog.get_logger("sshlease.filtering")
    log.info("dropped")
    log.warning("lease_config_rejected", field="lease")

    lines = capsys.readouterr().err.strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["msg"] == "lease_config_rejected"
    assert record["level"] == "warning"


def test_plain_text_output(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("info", json_output=False)
    structlog.get_logger("sshlease.plain").info("lease_config_written")

    line = _last_line(capsys)
    assert "msg='lease_config_written'" in line
    assert "level='info'" in line
