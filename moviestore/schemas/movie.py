"""
Movie Store — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract of the movie service.
Why:   Automatic serialization with stable field names and OpenAPI docs.
How:   Route handlers return these models; FastAPI renders them as JSON in
       field declaration order (id, isbn, title, director).

Note on input:
    Request bodies are NOT validated through these models by FastAPI.
    The service decodes raw bytes best-effort (see MovieService.decode_movie)
    so that a malformed body becomes a zero-valued Movie instead of a 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Models — What the API stores and returns
# ══════════════════════════════════════════════════════════════════════════


class Director(BaseModel):
    """
    What:  The person credited as a movie's director.
    Why:   Value-like: no identity, always owned by exactly one Movie.
    """
    firstname: str = Field(default="", description="Director's first name")
    lastname: str = Field(default="", description="Director's last name")


class Movie(BaseModel):
    """
    What:  A movie record in the in-memory collection.

    Field defaults make `Movie()` the zero-valued record: every string empty
    and no director. That is what a body that cannot be decoded turns into.

    Why `id` is a string:
        Generated ids are decimal integers rendered as text, and a client may
        address any string in the path, so ids are compared as strings.
    """
    id: str = Field(default="", description="Key within the collection (not enforced unique)")
    isbn: str = Field(default="", description="Free-form ISBN, no format checks")
    title: str = Field(default="", description="Movie title")
    director: Optional[Director] = Field(
        default=None,
        description="Director of the movie, or null"
    )


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "movie with ID '999' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for monitoring.
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    movies: int = Field(description="Number of movies currently in the collection")
    uptime_seconds: float = Field(description="Seconds since service started")
