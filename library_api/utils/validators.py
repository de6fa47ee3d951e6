"""
Field Validators

Checks shared by several schemas. Each function takes the raw value and
returns the normalized value or raises ValueError, so it can be called from
a Pydantic @field_validator:

    @field_validator("name")
    @classmethod
    def name_is_capitalized(cls, v: str) -> str:
        return first_letter_uppercase(v, "Name")
"""

from pydantic import HttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(HttpUrl)


def first_letter_uppercase(value: str, field_name: str) -> str:
    """
    Strip the value and require its first character to be uppercase.

    Names and titles in the catalog follow the "First letter capitalized"
    convention: "Borges" is accepted, "borges" is not.
    """
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    first = value[0]
    if first.isalpha() and not first.isupper():
        raise ValueError(f"{field_name} must start with an uppercase letter")
    return value


def http_url(value: str, field_name: str) -> str:
    """
    Require an absolute http(s) URL.

    The original string is returned (not pydantic's normalized Url object)
    so it can be stored in a Text column as given.
    """
    value = value.strip()
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError(f"{field_name} must be a valid http(s) URL") from None
    return value
