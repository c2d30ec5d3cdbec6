"""
Articles API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract.
Why:   Request decoding, response serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to decode request bodies, serialize
       responses, and generate the Swagger/OpenAPI documentation.

Design Decision:
    Schemas are separate from the SQLAlchemy model because the in-memory
    repository has no ORM rows at all; both repositories return
    ArticleResponse, so routes never care which store is active.

Decoding rules for ArticlePayload:
    - Missing fields decode as "" (the "unset" value checked by validation)
    - JSON null decodes as ""
    - A field of any other JSON type (number, object...) is a decode error
    - Unknown fields, including "id", are ignored
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ArticlePayload(BaseModel):
    """
    What:  Body of POST /articles and PUT /articles/{id}.
    Why defaults: Required-ness is checked by the validation step so that
           every missing field is reported, in field order, with the
           documented message, instead of Pydantic's 422 format.
    """
    title: str = Field(default="", description="Article title")
    content: str = Field(default="", description="Article body text")

    model_config = {
        "json_schema_extra": {
            "examples": [{"title": "Hello", "content": "World"}],
        },
    }

    @field_validator("title", "content", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """JSON null means 'not set', same as an omitted field."""
        return "" if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleResponse(BaseModel):
    """
    What:  Full representation of an article.
    Who:   Returned by every article endpoint that has a body on success.
    """
    id: int = Field(description="Storage-assigned article identifier")
    title: str = Field(description="Article title")
    content: str = Field(description="Article body text")

    model_config = {"from_attributes": True}


class FieldErrorResponse(BaseModel):
    """
    What:  One entry of the 400 body returned when create validation fails.

    Example:
        [{"key": "title", "error": "Field validation for 'title' failed on the 'required' tag"}]
    """
    key: str = Field(description="Name of the field that failed validation")
    error: str = Field(description="Human-readable validation message")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope for not-found and decode failures.

    Example:
        {"message": "Article not found"}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and storage status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Active article store: postgres, memory")
    database: str = Field(description="Storage connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
