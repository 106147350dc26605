# validation.py
# Course details go through sanitize_course_details before are_valid_course_details.
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

COURSE_FIELDS = ("title", "description", "price", "image_link", "published")

MAX_PRICE = 100000
_PRICE_RE = re.compile(r"^(0|[1-9][0-9]*)$")
_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}

URL_SCHEMES = {"http", "https", "ftp"}

_url_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class PasswordPolicy:
    """Minimum counts for a strong password"""
    min_length: int = 8
    min_lowercase: int = 1
    min_uppercase: int = 1
    min_numbers: int = 1
    min_symbols: int = 1

    @classmethod
    def from_config(cls, config) -> "PasswordPolicy":
        return cls(
            min_length=config.PASSWORD_MIN_LENGTH,
            min_lowercase=config.PASSWORD_MIN_LOWERCASE,
            min_uppercase=config.PASSWORD_MIN_UPPERCASE,
            min_numbers=config.PASSWORD_MIN_NUMBERS,
            min_symbols=config.PASSWORD_MIN_SYMBOLS,
        )


def _byte_length(s: str) -> int:
    return len(s.encode("utf-8"))


def _byte_length_between(s: str, low: int, high: int) -> bool:
    return low <= _byte_length(s) <= high


def is_valid_username(username: Any) -> bool:
    if not isinstance(username, str) or not username:
        return False
    return _byte_length_between(username, 4, 30) and " " not in username


def is_valid_password(password: Any, policy: Optional[PasswordPolicy] = None) -> bool:
    if not isinstance(password, str):
        return False
    policy = policy or PasswordPolicy()
    lower = sum(1 for c in password if c.islower())
    upper = sum(1 for c in password if c.isupper())
    numbers = sum(1 for c in password if c.isdigit())
    symbols = sum(1 for c in password if not c.isalnum())
    return (
        len(password) >= policy.min_length
        and lower >= policy.min_lowercase
        and upper >= policy.min_uppercase
        and numbers >= policy.min_numbers
        and symbols >= policy.min_symbols
    )


def is_valid_price(price: str) -> bool:
    if not _PRICE_RE.match(price):
        return False
    return int(price) <= MAX_PRICE


def is_valid_url(link: str) -> bool:
    if not link or any(c.isspace() for c in link):
        return False
    # links without a scheme are taken as http
    if "://" not in link:
        link = "http://" + link
    try:
        url = _url_adapter.validate_python(link)
    except PydanticValidationError:
        return False
    host = url.host or ""
    return url.scheme in URL_SCHEMES and "." in host.strip(".")


def is_boolean_string(value: str) -> bool:
    return value in _TRUE_VALUES or value in _FALSE_VALUES


def are_valid_course_details(fields: Mapping[str, Any]) -> bool:
    if not all(isinstance(fields.get(name), str) for name in COURSE_FIELDS):
        return False
    title = fields["title"]
    description = fields["description"]
    valid_title = _byte_length_between(title, 10, 50) and bool(title.strip())
    valid_description = _byte_length_between(description, 50, 500) and bool(description.strip())
    return (
        valid_title
        and valid_description
        and is_valid_price(fields["price"])
        and is_valid_url(fields["image_link"])
        and is_boolean_string(fields["published"])
    )


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    # None, lists, objects: left empty so validation rejects them
    return ""


def sanitize_course_details(fields: Mapping[str, Any]) -> Dict[str, str]:
    """Trim every course field, turning numbers and booleans into strings"""
    return {name: _to_text(fields.get(name)).strip() for name in COURSE_FIELDS}


def parse_course_details(fields: Mapping[str, str]) -> Dict[str, Any]:
    """Typed column values for a sanitized set that passed validation"""
    return {
        "title": fields["title"],
        "description": fields["description"],
        "price": int(fields["price"]),
        "image_link": fields["image_link"],
        "published": fields["published"] in _TRUE_VALUES,
    }
