"""
Validation patterns for fixture API payload fields.

Compiled with re.ASCII so digit and whitespace classes only accept ASCII.
assert_matches applies them with fullmatch, so a trailing newline does not
pass the $ anchor.
"""

import re

EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$",
    re.ASCII,
)

# Alphanumeric with optional dots, dashes, underscores
USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9._-]{3,20}$", re.ASCII)

# Digits, separators and extensions, at least 10 characters
PHONE_REGEX = re.compile(r"^\+?[\d\s\-()x]{10,}$", re.ASCII)

# Bare host name with at least one dot, no scheme
WEBSITE_REGEX = re.compile(
    r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$",
    re.ASCII,
)

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
