"""Sanitization and validation of submitted author forms.

``validate_author_form`` is the only entry point the handlers use: it takes
the raw submitted mapping and returns an ``AuthorFormResult`` holding either
the validated ``AuthorFormData`` or the list of field errors, together with
the sanitized values to echo back into the form.

Rules, applied to both create and update:

- ``first_name`` / ``family_name``: trimmed, required, HTML-escaped, then
  restricted to ASCII letters and digits.
- ``date_of_birth`` / ``date_of_death``: optional; empty values become None,
  anything else must be an ISO-8601 date or datetime and is parsed to a date.
"""

import html
import re
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from .schemas import AuthorBase

NAME_FIELDS = ("first_name", "family_name")
DATE_FIELDS = ("date_of_birth", "date_of_death")

_NAME_LABELS = {"first_name": "First name", "family_name": "Family name"}
_DATE_MESSAGES = {"date_of_birth": "Invalid date of birth", "date_of_death": "Invalid date of death"}

_ALPHANUMERIC = re.compile(r"[0-9A-Za-z]+")

# Escaped on top of what html.escape covers.
_EXTRA_ESCAPES = str.maketrans({"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"})

# Reduced-precision calendar dates: YYYY or YYYY-MM.
_REDUCED_DATE = re.compile(r"([0-9]{4})(?:-([0-9]{2}))?")


def escape_html(value: str) -> str:
    """Replace markup-significant characters with HTML entities."""
    return html.escape(value, quote=True).translate(_EXTRA_ESCAPES)


def parse_iso8601(value: str) -> date:
    """Parse an ISO-8601 date or datetime string into a date.

    A year alone or a year and month stand for the first day of that period.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    reduced = _REDUCED_DATE.fullmatch(value)
    if reduced:
        return date(int(reduced[1]), int(reduced[2] or 1), 1)

    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def sanitize_author_form(raw: Mapping[str, Any]) -> Dict[str, str]:
    """Trim and escape the submitted fields.

    Names are trimmed and escaped; dates are only trimmed so that an
    invalid value can be shown back to the user unchanged.
    """
    values = {field: escape_html(_as_text(raw.get(field)).strip()) for field in NAME_FIELDS}
    values.update({field: _as_text(raw.get(field)).strip() for field in DATE_FIELDS})
    return values


class AuthorFormData(AuthorBase):
    """Validated, sanitized author fields submitted through the form.

    Immutable and separate from both the ORM model and ``AuthorRead``.
    Expects values already passed through ``sanitize_author_form``.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator(*NAME_FIELDS, mode="before")
    @classmethod
    def check_name(cls, value: Any, info: ValidationInfo) -> str:
        label = _NAME_LABELS[info.field_name]
        text = _as_text(value).strip()
        if not text:
            raise PydanticCustomError("name_missing", f"{label} must be specified.")
        if not _ALPHANUMERIC.fullmatch(text):
            raise PydanticCustomError("name_not_alphanumeric", f"{label} has non-alphanumeric characters.")
        return text

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def check_date(cls, value: Any, info: ValidationInfo) -> Optional[date]:
        if value is None or value == "":
            return None
        if isinstance(value, date):
            return value
        try:
            return parse_iso8601(_as_text(value))
        except ValueError:
            raise PydanticCustomError("invalid_date", _DATE_MESSAGES[info.field_name])


class FieldError(BaseModel):
    """A single failed rule on a submitted form field."""

    model_config = ConfigDict(frozen=True)

    field: str
    msg: str
    value: Any = None


class AuthorFormResult(BaseModel):
    """Outcome of validating an author form.

    ``values`` always holds the sanitized submission so the form can be
    echoed back; ``data`` is set only when there are no errors.
    """

    values: Dict[str, Any]
    data: Optional[AuthorFormData] = None
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.data is not None and not self.errors


def validate_author_form(raw: Mapping[str, Any]) -> AuthorFormResult:
    """Sanitize and validate a submitted author form.

    Args:
        raw: Submitted form fields; unknown keys are ignored

    Returns:
        Result carrying the sanitized values and either the validated data
        or the field errors, in field order
    """
    values = sanitize_author_form(raw)

    try:
        data = AuthorFormData.model_validate(values)
    except PydanticValidationError as exc:
        errors = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            errors.append(FieldError(field=field, msg=error["msg"], value=values.get(field)))
        return AuthorFormResult(values=values, errors=errors)

    return AuthorFormResult(values=values, data=data)
