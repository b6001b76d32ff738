"""Log sanitization filter to keep employee PII and credentials out of logs.

Wellness data is sensitive, so anything that identifies an employee is
redacted before a record is written:
- Email addresses and phone numbers
- Employee identifiers (``employee_id=...`` and bare UUIDs)
- Bearer tokens, JWTs and authorization headers
- Password, secret and token fields

Usage:
    from wellness_engine.utils.log_sanitizer import configure_logging

    # Apply to all loggers at application startup
    configure_logging("INFO")
"""

import logging
import re
from typing import Any, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log messages."""

    # Order matters - more specific patterns should come before general ones
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # JWT tokens (three base64-encoded segments separated by dots) - before Bearer
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+'), '[REDACTED_JWT]'),

        # Bearer tokens in Authorization headers
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),

        # Authorization header values (generic)
        (re.compile(r'(Authorization["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Password, secret and token fields
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(secret["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(api_key["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Employee identifiers in key/value form
        (re.compile(r'(employee_?id["\']?\s*[:=]\s*["\']?)[^"\'&\s,)]+', re.IGNORECASE), r'\1[REDACTED]'),

        # UUIDs (employee and organisation ids)
        (re.compile(r'\b[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\b'),
         '[REDACTED_ID]'),

        # Email addresses
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),

        # Phone numbers (international or 10-digit North American forms)
        (re.compile(r'(?<![\w.])\+\d{1,3}[ .-]?\(?\d{1,4}\)?(?:[ .-]?\d{2,4}){2,4}\b'), '[REDACTED_PHONE]'),
        (re.compile(r'(?<![\w.])\(?\d{3}\)?[ .-]\d{3}[ .-]\d{4}\b'), '[REDACTED_PHONE]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; never drops it."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        if record.args:
            record.args = self._sanitize_args(record.args)

        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments.

        Numbers are left alone so ``%d``/``%.1f`` formatting keeps working.
        """
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        elif isinstance(args, (int, float)):
            return args
        else:
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: Optional[str] = None) -> None:
    """Install the log sanitization filter on loggers.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
        return

    root_logger = logging.getLogger()
    root_logger.addFilter(sanitizer)
    for handler in root_logger.handlers:
        handler.addFilter(sanitizer)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and API and install the sanitizer."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
    root_logger = logging.getLogger()
    if not any(isinstance(f, LogSanitizationFilter) for f in root_logger.filters):
        install_log_sanitizer()


def sanitize_string(text: str) -> str:
    """Sanitize a string without using the logging system.

    Useful for error messages that might be returned to clients.
    """
    return LogSanitizationFilter()._sanitize(text)
