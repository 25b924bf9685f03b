"""
Pure checks on submitted registration and login data.

Nothing here touches storage, so every function can be exercised offline.
The incremental ``*_char`` checks mirror what the signup form enforces while
the user types; ``validate_registration`` is the full check run before an
account is written.
"""
import json
import re
from dataclasses import dataclass, field
from typing import List, Optional

from config import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from errors import ValidationError

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
USERNAME_RE = re.compile(r"[a-zA-Z0-9_]+")
NAME_RE = re.compile(r"[a-zA-Z\s]+")
WORD_CHAR_RE = re.compile(r"\w")


@dataclass(frozen=True)
class RegistrationForm:
    username: str = ""
    password: str = ""
    confirm_password: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    role: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    linkedin_profile: Optional[str] = None
    github_profile: Optional[str] = None


def validate_email(value) -> bool:
    """True iff ``value`` looks like ``local@domain.tld`` with a 2+ letter TLD."""
    return EMAIL_RE.fullmatch(str(value)) is not None


def validate_password_strength(value: str) -> bool:
    """
    At least 8 characters with one uppercase letter, one lowercase letter
    and one digit. Special characters and maximum length are not checked.
    """
    if not value or len(value) < MIN_PASSWORD_LENGTH:
        return False
    return (
        re.search(r"[A-Z]", value) is not None
        and re.search(r"[a-z]", value) is not None
        and re.search(r"[0-9]", value) is not None
    )


def _rejects_lone_symbol(partial: str) -> bool:
    # A field may not start with a single whitespace/punctuation character.
    return len(partial) == 1 and WORD_CHAR_RE.match(partial) is None


def validate_username_char(partial: str) -> bool:
    """Accept a partially typed username: empty, or letters, digits and underscores."""
    if _rejects_lone_symbol(partial):
        return False
    return partial == "" or USERNAME_RE.fullmatch(partial) is not None


def validate_name_char(partial: str) -> bool:
    """Accept a partially typed first/last name: empty, or letters and whitespace."""
    if _rejects_lone_symbol(partial):
        return False
    return partial == "" or NAME_RE.fullmatch(partial) is not None


def validate_registration(form: RegistrationForm) -> None:
    """
    Run the signup checks in order and raise ``ValidationError`` with the
    message of the first rule that fails.

    ``confirm_password`` is only compared when the caller supplied one.
    """
    if not form.username or len(form.username) < MIN_USERNAME_LENGTH:
        raise ValidationError("Username must be at least 3 characters")
    if not USERNAME_RE.fullmatch(form.username):
        raise ValidationError("Username may only contain letters, numbers and underscores")

    if not validate_email(form.email or ""):
        raise ValidationError("Invalid email format")

    if not form.first_name or len(form.first_name) < MIN_NAME_LENGTH:
        raise ValidationError("First name is required and must be at least 2 characters")
    if not NAME_RE.fullmatch(form.first_name):
        raise ValidationError("First name may only contain letters and spaces")

    if not form.last_name or len(form.last_name) < MIN_NAME_LENGTH:
        raise ValidationError("Last name is required and must be at least 2 characters")
    if not NAME_RE.fullmatch(form.last_name):
        raise ValidationError("Last name may only contain letters and spaces")

    if not validate_password_strength(form.password):
        raise ValidationError(
            "Password must be at least 8 characters, include uppercase, lowercase, and number"
        )

    if form.confirm_password is not None and form.password != form.confirm_password:
        raise ValidationError("Passwords do not match")


def validate_login(username: str, password: str) -> None:
    if not username or not password:
        raise ValidationError("Please enter both username and password")


def parse_skills(value) -> List[str]:
    """
    Normalise the ``skills`` field of a signup request.

    Clients send a JSON-encoded array (``'["Python", "React"]'``); a decoded
    list or nothing at all is accepted too. Order is kept, blanks and repeats
    are dropped.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            raise ValidationError("Skills must be a list of strings")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ValidationError("Skills must be a list of strings")

    skills = []
    for skill in value:
        skill = skill.strip()
        if skill and skill not in skills:
            skills.append(skill)
    return skills
