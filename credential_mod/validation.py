"""Format checks usable as pre-filters before a credential is hashed.

Every check takes an optional predicate so callers can swap in their own rule
(a regex via ``pattern()``, a plain function, or several via ``all_of()``)
without changing how the check is called.
"""
from __future__ import annotations
import re
from typing import Callable, Optional, Pattern, Union

Predicate = Callable[[str], bool]

PASSWORD_REGEX = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,15}$"
EMAIL_REGEX = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
# Russian phone numbers: optional +7 / 8 prefix, optional area code.
PHONE_REGEX = r"^(\+7|8)?[\s-]?(\(?\d{3}\)?[\s-]?)?[\d\s-]{7,10}$"


def pattern(regex: Union[str, Pattern[str]]) -> Predicate:
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def check(text: str) -> bool:
        return compiled.search(text) is not None

    return check


def all_of(*predicates: Predicate) -> Predicate:
    def check(text: str) -> bool:
        return all(p(text) for p in predicates)

    return check


def is_length(text: str, min_length: Optional[int] = None, max_length: Optional[int] = None) -> bool:
    """True if ``text`` is non-empty and within the optional bounds."""
    length = len(text)
    return (
        length > 0
        and (min_length is None or length >= min_length)
        and (max_length is None or length <= max_length)
    )


def is_correct_password(text: str, check: Optional[Predicate] = None) -> bool:
    return (check or DEFAULT_PASSWORD_POLICY)(text)


def is_correct_email(text: str, check: Optional[Predicate] = None) -> bool:
    return (check or pattern(EMAIL_REGEX))(text)


def is_correct_phone(text: str, check: Optional[Predicate] = None) -> bool:
    return (check or pattern(PHONE_REGEX))(text)


DEFAULT_PASSWORD_POLICY: Predicate = pattern(PASSWORD_REGEX)
