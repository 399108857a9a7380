"""
Pydantic v2 input schemas.

Every mutation argument set is validated here before it reaches the
database, so bad data is rejected early with a readable message. Output
shapes live in ``graph/types.py``.
"""

import re

from pydantic import BaseModel, field_validator

from config import settings


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9._\-]+$")


def _validate_text(value: str, field_name: str) -> str:
    """Strip a free-text body and enforce the content length limit."""
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} must not be empty")
    if len(value) > settings.THOUGHT_MAX_LENGTH:
        raise ValueError(
            f"{field_name} too long. Maximum {settings.THOUGHT_MAX_LENGTH} characters allowed"
        )
    return value


class SignupInput(BaseModel):
    username: str
    email: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username must not be empty")
        if len(v) > 255:
            raise ValueError("Username too long. Maximum 255 characters allowed")
        if not USERNAME_RE.match(v):
            raise ValueError(
                f"Invalid username '{v}'. "
                "Use only alphanumeric characters, hyphens, dots, and underscores"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Must match an email address!")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if len(v.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
            raise ValueError(
                f"Password too long. Maximum {settings.PASSWORD_MAX_BYTES} bytes allowed"
            )
        return v


class ThoughtInput(BaseModel):
    thought_text: str

    @field_validator("thought_text")
    @classmethod
    def validate_thought_text(cls, v: str) -> str:
        return _validate_text(v, "Thought")


class ReactionInput(BaseModel):
    reaction_body: str

    @field_validator("reaction_body")
    @classmethod
    def validate_reaction_body(cls, v: str) -> str:
        return _validate_text(v, "Reaction")
