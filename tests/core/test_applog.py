"""Tests for the request/response audit log."""

import json
import logging

import pytest

from core import applog


@pytest.fixture
def audit_dir(tmp_path):
    yield tmp_path
    applog.shutdown()
    logging.getLogger(applog.AUDIT_LOGGER_NAME).propagate = True


class TestMasking:
    def test_nested_keys_are_masked(self):
        masked = applog.mask_sensitive({"userid": "a", "Password": "p", "data": [{"token": "t", "pwd": "x"}]})
        assert masked == {"userid": "a", "Password": "***", "data": [{"token": "***", "pwd": "***"}]}

    def test_scalars_pass_through(self):
        assert applog.mask_sensitive(5) == 5


class TestRequestLog:
    def test_authorization_header_is_dropped(self):
        log = applog.build_request_log(
            method="GET",
            url="http://testserver/budgets",
            headers={"authorization": "Bearer abc", "user-agent": "curl/8"},
            client_ip="10.0.0.1",
        )
        assert log["headers"] == {"user-agent": "curl/8"}
        assert log["agent"] == "curl/8"
        assert log["body"] is None

    def test_json_body_is_decoded(self):
        log = applog.build_request_log(method="POST", url="/", headers={}, client_ip=None, body=b'{"amount": 5}')
        assert log["body"] == {"amount": 5}

    def test_non_json_body_is_kept_raw(self):
        log = applog.build_request_log(method="POST", url="/", headers={}, client_ip=None, body=b"a=1\nb=2")
        assert log["body"] == {"raw_body": "a=1b=2"}

    def test_error_detail_is_optional(self):
        assert applog.response_error("database error") == {"status": "error", "message": "database error"}
        assert applog.response_error("database error", "timeout")["detail"] == "timeout"


class TestConfigure:
    def test_lines_are_written_to_file(self, audit_dir, monkeypatch):
        monkeypatch.setenv("LOG_PREFIX", "audit")
        applog.configure(directory=str(audit_dir), console=False)
        request_log = applog.build_request_log(
            method="POST",
            url="/user/login",
            headers={},
            client_ip=None,
            body=b'{"userid": "a", "password": "p"}',
        )
        applog.log_request_response(request_log, {"status": "success", "token": "abc"})
        applog.shutdown()

        text = (audit_dir / "audit.log").read_text(encoding="utf-8")
        line = json.loads(text.strip().split(" ", 2)[2])
        assert line["request"]["body"] == {"userid": "a", "password": "***"}
        assert line["response"]["token"] == "***"
        assert "abc" not in text

    def test_reconfigure_replaces_handlers(self, audit_dir):
        applog.configure(directory=str(audit_dir), console=True)
        audit = applog.configure(directory=str(audit_dir), console=False)
        assert len(audit.handlers) == 1
