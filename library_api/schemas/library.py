"""
Library Pydantic Schemas

A library is addressed through its owner ("my library"), so requests only
carry book ids; the user comes from the access token.
"""

from pydantic import BaseModel, ConfigDict, Field


class LibraryBooksRequest(BaseModel):
    """
    Body for the bulk add/remove endpoints.

    Example request body:
    {
        "book_ids": [1, 4, 7]
    }
    """

    book_ids: list[int] = Field(
        ...,
        description="Ids of the books to add or remove",
        examples=[[1, 4, 7]],
    )


class LibraryResponse(BaseModel):
    """State of a library after a membership change."""

    id: int = Field(..., description="Library ID")
    user_id: int = Field(..., description="Owner of the library")
    book_ids: list[int] = Field(
        default=[],
        description="Ids of the member books, in the order they were added",
    )

    model_config = ConfigDict(from_attributes=True)
