"""Contact detail formats accepted at checkout."""

import re

# local@domain.tld, no whitespace and exactly one @
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# North American 3-3-4 grouping: 5551234567, 555-123-4567, (555) 123-4567, 555.123.4567
PHONE_PATTERN = re.compile(r"^\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})$")

# 12345 or 12345-6789
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_phone(value: str) -> bool:
    return bool(value) and PHONE_PATTERN.fullmatch(value) is not None


def is_valid_zip(value: str) -> bool:
    return bool(value) and ZIP_PATTERN.fullmatch(value) is not None
