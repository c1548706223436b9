"""
Input validation for link creation.

Pure functions: no I/O, no exceptions for bad input. Each returns a
ValidationResult and the caller decides what a failure means.
"""

import ipaddress
import re
from typing import NamedTuple, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

MAX_URL_LENGTH = 2048
MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 8
URL_PREFIXES = ("http://", "https://")

# Paths served by fixed routes; a link with one of these codes could never redirect
RESERVED_CODES = frozenset({"healthz", "links", "docs", "redoc"})

CODE_PATTERN = re.compile(r"[A-Za-z0-9]+")
WHITESPACE_PATTERN = re.compile(r"\s")
HOST_LABEL_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
TLD_PATTERN = re.compile(r"[A-Za-z]{2,63}|xn--[A-Za-z0-9-]+")

http_url_adapter = TypeAdapter(HttpUrl)


class ValidationResult(NamedTuple):
    valid: bool
    error: Optional[str] = None


VALID = ValidationResult(True)


def _is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def _is_valid_hostname(host: str) -> bool:
    """Dotted DNS name with a real TLD ("localhost" and "a" are rejected)"""
    labels = host.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not all(HOST_LABEL_PATTERN.fullmatch(label) for label in labels):
        return False
    return bool(TLD_PATTERN.fullmatch(labels[-1]))


def _is_well_formed_url(url: str) -> bool:
    # HttpUrl is lenient about "https:/host" and stray whitespace
    if not url.lower().startswith(URL_PREFIXES) or WHITESPACE_PATTERN.search(url):
        return False

    try:
        parsed = http_url_adapter.validate_python(url)
    except ValidationError:
        return False

    host = parsed.host
    if not host:
        return False
    return _is_ip_address(host) or _is_valid_hostname(host)


def validate_target_url(url: Optional[str]) -> ValidationResult:
    """Validate a destination URL.

    Fails if the URL is missing or blank, is longer than 2048 characters,
    or is not an absolute http/https URL with a valid host. The URL itself
    is stored as given; parsing is only used to check it.
    """
    if not url or not url.strip():
        return ValidationResult(False, "URL is required")

    if len(url) > MAX_URL_LENGTH:
        return ValidationResult(
            False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
        )

    if not _is_well_formed_url(url):
        return ValidationResult(
            False, "Invalid URL format. Must start with http:// or https://"
        )

    return VALID

def validate_code(code: Optional[str]) -> ValidationResult:
    """Validate a custom short code: 6-8 characters, A-Z a-z 0-9 only.

    The message says which rule failed (too short, too long, bad characters).
    """
    if not code or not code.strip():
        return ValidationResult(False, "Code is required")

    if len(code) < MIN_CODE_LENGTH:
        return ValidationResult(
            False, f"Code must be at least {MIN_CODE_LENGTH} characters long"
        )

    if len(code) > MAX_CODE_LENGTH:
        return ValidationResult(
            False, f"Code must be at most {MAX_CODE_LENGTH} characters long"
        )

    # str.isalnum() would accept non-ASCII letters and digits
    if not CODE_PATTERN.fullmatch(code):
        return ValidationResult(
            False, "Code can only contain letters (A-Z, a-z) and numbers (0-9)"
        )

    if code.lower() in RESERVED_CODES:
        return ValidationResult(False, f"'{code}' is reserved and cannot be used as a code")

    return VALID


def validate_create_request(
    target_url: Optional[str],
    custom_code: Optional[str] = None
) -> ValidationResult:
    """Validate a create request.

    The URL is always checked. The code is checked only when one was
    supplied; an empty string counts as "not supplied".
    """
    url_result = validate_target_url(target_url)
    if not url_result.valid:
        return url_result

    if custom_code:
        code_result = validate_code(custom_code)
        if not code_result.valid:
            return code_result

    return VALID
