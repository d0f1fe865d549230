"""
Request and response models for the books API.

Incoming payloads are validated in strict mode: "102" is not an integer and
102 is not a string. Responses use plain models since their data already
passed through the domain.
"""

from typing import Annotated, List, Optional, Union

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Accept ``value`` only if it parses as an absolute URL with a host.

    The original string is returned untouched so that it round-trips exactly.
    """
    try:
        url = _url_adapter.validate_python(value)
    except ValueError:
        raise PydanticCustomError("url", "Input should be a valid URL")
    if not url.host:
        raise PydanticCustomError("url", "Input should be a valid URL")
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
# Non-blank: at least one non-whitespace character
IsbnStr = Annotated[str, Field(min_length=1, pattern=r"\S")]

# Range of a SQLite INTEGER column
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1
PageCount = Annotated[int, Field(ge=0, le=SQLITE_INT_MAX)]
Year = Annotated[int, Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]


# request bodies

class BookCreate(BaseModel):
    """
    Request body for POST /books/. Every field is required.
    """
    model_config = ConfigDict(extra="forbid", strict=True)

    isbn: IsbnStr = Field(description="International Standard Book Number")
    amazon_url: UrlStr = Field(description="Product page URL")
    author: str
    language: str
    pages: PageCount = Field(description="Number of pages")
    publisher: str
    title: str
    year: Year = Field(description="Publication year")


class BookUpdate(BaseModel):
    """
    Request body for PUT /books/{isbn}.

    Every field is optional, but a field that is present must be valid;
    null is never accepted.
    """
    model_config = ConfigDict(extra="forbid", strict=True)

    isbn: Optional[IsbnStr] = None
    amazon_url: Optional[UrlStr] = None
    author: Optional[str] = None
    language: Optional[str] = None
    pages: Optional[PageCount] = None
    publisher: Optional[str] = None
    title: Optional[str] = None
    year: Optional[Year] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise PydanticCustomError("null_value", "Input should not be null")
        return value


# response bodies

class Book(BaseModel):
    """
    API representation of a Book entity.
    """
    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int


class BookResponse(BaseModel):
    book: Book


class BookListResponse(BaseModel):
    books: List[Book]


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = Field(description="'ok' when the store answers")
    books: int = Field(ge=0, description="Number of stored books")


class ErrorDetail(BaseModel):
    message: Union[str, List[str]] = Field(
        description="Error message, or one message per violation for invalid input"
    )
    status: int = Field(description="HTTP status code, repeated in the body")


class ErrorResponse(BaseModel):
    error: ErrorDetail
