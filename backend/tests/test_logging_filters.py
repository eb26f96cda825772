"""Tests for log redaction of customer contact details."""

import logging

from rentdesk.security.logging_filters import (
    SensitiveFilter,
    install_sensitive_filter,
    redact,
)


def test_redacts_email_and_phone() -> None:
    message = redact("Client events@acme.example called from +55 11 98888-7777")
    assert "acme.example" not in message
    assert "98888" not in message
    assert message.count("**REDACTED**") == 2


def test_leaves_identifiers_alone() -> None:
    message = "Handoff 3f2a9c1e-1d4b-4c7a-9e53-2b1f0c8d7a61 moved pending -> assigned"
    assert redact(message) == message


def test_filter_scrubs_arguments() -> None:
    record = logging.LogRecord(
        name="rentdesk",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Contact %s",
        args=("dana@example.com",),
        exc_info=None,
    )
    assert SensitiveFilter().filter(record) is True
    assert record.getMessage() == "Contact **REDACTED**"


class _Collector(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def test_installed_filter_scrubs_child_logger_records() -> None:
    handler = _Collector()
    parent = logging.getLogger("rentdesk_redaction_check")
    parent.setLevel(logging.INFO)
    parent.addHandler(handler)
    try:
        install_sensitive_filter(("rentdesk_redaction_check",))
        install_sensitive_filter(("rentdesk_redaction_check",))
        child = logging.getLogger("rentdesk_redaction_check.services.delivery")
        child.info("Notified %s at %s", "dana@example.com", "+55 11 98888-7777")
    finally:
        parent.removeHandler(handler)

    assert handler.messages == ["Notified **REDACTED** at **REDACTED**"]
    assert sum(isinstance(flt, SensitiveFilter) for flt in handler.filters) == 1
