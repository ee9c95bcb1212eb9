"""
validators.py — Input Validators for Customer Data

Boolean checks (email shape, Philippine phone numbers) never raise; they return
False for anything they cannot accept. The registration validator collects
every message from the field checks instead of stopping at the first one.
"""

import math
import re
from numbers import Real
from typing import Any, List, Mapping

from .models import RegistrationResult

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Philippine mobile numbers: 09XXXXXXXXX, +639XXXXXXXXX, 639XXXXXXXXX
PHONE_PATTERNS = (
    re.compile(r"09[0-9]{9}"),
    re.compile(r"\+639[0-9]{9}"),
    re.compile(r"639[0-9]{9}"),
)

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = re.compile(r"[!@#$%^&*]")
MINIMUM_AGE = 18


def is_valid_email(email) -> bool:
    """
    Shape check for an email address: one '@', non-empty local part and a
    domain containing a dot. Spaces are not allowed anywhere.
    """
    if not email or not isinstance(email, str):
        return False
    if " " in email:
        return False

    parts = email.split("@")
    if len(parts) != 2:
        return False
    username, domain = parts
    if not username or not domain:
        return False
    return "." in domain


def validate_email(email) -> bool:
    if not email or not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_phone_number(phone_number) -> bool:
    """
    Validates Philippine phone numbers.

    Valid formats:
        - 09171234567 (11 digits starting with 09)
        - +639171234567 (with country code)
        - 639171234567 (country code without +)

    Surrounding whitespace is ignored; spaces, dashes or other symbols inside the
    number are not.
    """
    if not isinstance(phone_number, str) or not phone_number.strip():
        return False

    trimmed = phone_number.strip()
    return any(pattern.fullmatch(trimmed) for pattern in PHONE_PATTERNS)


def validate_username(username) -> List[str]:
    errors = []

    if not isinstance(username, str) or not username.strip():
        errors.append("Username is required")
        return errors

    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors.append(f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters")

    if not USERNAME_PATTERN.fullmatch(username):
        errors.append("Username can only contain letters, numbers, and underscore")

    if username[0] in "0123456789":
        errors.append("Username cannot start with a number")

    return errors


def validate_email_field(email) -> List[str]:
    if not isinstance(email, str) or not email.strip():
        return ["Email is required"]

    if not validate_email(email):
        return ["Invalid email format"]
    return []


def validate_password(password) -> List[str]:
    errors = []

    if not isinstance(password, str) or not password:
        errors.append("Password is required")
        return errors

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain uppercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain number")
    if not PASSWORD_SPECIAL_CHARS.search(password):
        errors.append("Password must contain special character")

    return errors


def validate_age(age) -> List[str]:
    # 0 is a present (if too young) age
    if age is None or age == "":
        return ["Age is required"]

    if isinstance(age, bool) or not isinstance(age, Real) or math.isnan(age):
        return ["Age must be a number"]

    if age < MINIMUM_AGE:
        return [f"Must be {MINIMUM_AGE} or older"]
    return []


def validate_registration(user_data: Mapping[str, Any]) -> RegistrationResult:
    """
    Validates user registration data.

    Runs the username, email, password and age checks independently and
    concatenates their messages in that order.

    Args:
        user_data (Mapping): Registration data with keys username, email, password and age.

    Returns:
        RegistrationResult: isValid is True only when no check reported an error.
    """
    errors = []
    errors.extend(validate_username(user_data.get("username")))
    errors.extend(validate_email_field(user_data.get("email")))
    errors.extend(validate_password(user_data.get("password")))
    errors.extend(validate_age(user_data.get("age")))

    return RegistrationResult(isValid=not errors, errors=errors)
