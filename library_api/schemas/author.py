"""
Author Pydantic Schemas

Request shapes for author operations. Response shapes (which embed book
summaries) live in library_api.schemas.views.

Conventions:
- name and surname start with an uppercase letter, max 50 characters
- biography_url, when present, is an absolute http(s) URL
"""

from datetime import date

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from library_api.utils.validators import first_letter_uppercase, http_url


class AuthorFields(BaseModel):
    """
    Shared author fields, without input validation.

    Extended by AuthorBase for requests and by the response summaries, which
    must serialize stored rows as they are.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Author's given name",
        examples=["Jorge Luis", "Ursula"],
    )

    surname: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Author's family name",
        examples=["Borges", "Le Guin"],
    )

    description: str | None = Field(
        default=None,
        max_length=5000,
        description="Short description of the author",
        examples=["Argentine short-story writer, essayist and poet."],
    )

    birth_date: date = Field(
        ...,
        description="Date of birth",
        examples=["1899-08-24"],
    )

    photo_source: str | None = Field(
        default=None,
        max_length=2000,
        description="Reference to the author's photo",
        examples=["https://images.example.com/authors/borges.jpg"],
    )

    biography_url: str | None = Field(
        default=None,
        max_length=2000,
        description="URL of an external biography",
        examples=["https://en.wikipedia.org/wiki/Jorge_Luis_Borges"],
    )


class AuthorBase(AuthorFields):
    """Author fields as accepted on creation and full replacement (PUT)."""

    @field_validator("name", "surname")
    @classmethod
    def names_are_capitalized(cls, v: str, info: ValidationInfo) -> str:
        """Enforce the capitalization convention on both name fields."""
        return first_letter_uppercase(v, info.field_name.capitalize())

    @field_validator("biography_url")
    @classmethod
    def biography_url_is_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return http_url(v, "Biography URL")


class AuthorCreate(AuthorBase):
    """
    Schema for creating or fully replacing an author.

    Usage in route:
        @router.post("/authors/")
        def create_author(author_data: AuthorCreate):
            ...
    """
    pass


class AuthorUpdate(BaseModel):
    """
    Schema for partially updating an author (PATCH).

    Every field is optional; only the fields present in the request body are
    applied. A body with no fields at all is rejected by the router.
    """

    name: str | None = Field(default=None, min_length=1, max_length=50)
    surname: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=5000)
    birth_date: date | None = Field(default=None)
    photo_source: str | None = Field(default=None, max_length=2000)
    biography_url: str | None = Field(default=None, max_length=2000)

    @field_validator("name", "surname")
    @classmethod
    def names_are_capitalized(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is None:
            return v
        return first_letter_uppercase(v, info.field_name.capitalize())

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "AuthorUpdate":
        """An explicit null may only clear optional columns."""
        for field in ("name", "surname", "birth_date"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    @field_validator("biography_url")
    @classmethod
    def biography_url_is_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return http_url(v, "Biography URL")
