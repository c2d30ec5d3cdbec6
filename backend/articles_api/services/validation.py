"""
Articles API — Create Payload Validation
=========================================

What:  Required-field checks for POST /articles.
Why:   A new article without a title or content is rejected before any
       storage work happens.
How:   A statically declared table of (field name, accessor) pairs is walked
       in order; every empty field yields one FieldError.

Message format (part of the public API, clients match on it):
    Field validation for '<field>' failed on the 'required' tag
"""

from typing import Callable, List, NamedTuple, Tuple

from articles_api.schemas.article import ArticlePayload

REQUIRED_MESSAGE = "Field validation for '{field}' failed on the '{tag}' tag"


class FieldError(NamedTuple):
    """A single missing-required-value report."""

    field: str
    message: str


# Order matters: errors are reported in this order.
REQUIRED_FIELDS: Tuple[Tuple[str, Callable[[ArticlePayload], str]], ...] = (
    ("title", lambda payload: payload.title),
    ("content", lambda payload: payload.content),
)


def validate_article(payload: ArticlePayload) -> List[FieldError]:
    """
    Check every required field and collect all failures.

    Only the empty string counts as missing: whitespace is a value, and no
    trimming, coercion or length check is applied.

    Returns:
        Errors in REQUIRED_FIELDS order; empty list when the payload is valid.
    """
    errors = []
    for field, accessor in REQUIRED_FIELDS:
        if accessor(payload) == "":
            errors.append(
                FieldError(field, REQUIRED_MESSAGE.format(field=field, tag="required"))
            )
    return errors
