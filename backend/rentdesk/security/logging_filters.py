"""Logging filters that scrub customer contact details."""

from __future__ import annotations

import logging
import re

_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_PHONE_PATTERN = re.compile(r"(?<![\w-])\+?\d[\d ().-]{7,}\d(?![\w-])")

REDACTED = "**REDACTED**"
_MIN_PHONE_DIGITS = 10


def _mask_phone(match: re.Match[str]) -> str:
    digits = sum(char.isdigit() for char in match.group())
    return REDACTED if digits >= _MIN_PHONE_DIGITS else match.group()


def redact(message: str) -> str:
    """Mask e-mail addresses and phone numbers in ``message``."""
    message = _EMAIL_PATTERN.sub(REDACTED, message)
    return _PHONE_PATTERN.sub(_mask_phone, message)


class SensitiveFilter(logging.Filter):
    """Replace contact details in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: redact(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    redact(arg) if isinstance(arg, str) else arg for arg in record.args
                )
        return True


def install_sensitive_filter(
    logger_names: tuple[str, ...] = ("", "uvicorn", "uvicorn.access", "uvicorn.error"),
) -> None:
    """Attach ``SensitiveFilter`` to the handlers of the named loggers.

    Handler filters also see records propagated from child loggers such as
    ``rentdesk.services.*``.
    """
    for name in logger_names:
        for handler in logging.getLogger(name).handlers:
            if not any(isinstance(flt, SensitiveFilter) for flt in handler.filters):
                handler.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter", "redact"]
