"""
Schema validation for incoming book payloads.

Validation never stops at the first problem: every violation in the payload
is collected and reported as one human-readable message, e.g.
``"year: Input should be a valid integer"``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import ValidationError

from bookstore.api.v1.schemas import BookCreate, BookUpdate
from bookstore.domain.errors import BookValidationError


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload."""

    data: Dict[str, Any] = field(default_factory=dict)
    """Validated fields (only the ones present, for partial payloads)"""

    errors: List[str] = field(default_factory=list)
    """One message per violation; empty when the payload is valid"""

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "body"
        messages.append(f"{location}: {err['msg']}")
    return messages


def validate_book(payload: Any, *, partial: bool = False) -> ValidationResult:
    """
    Validate a raw JSON payload against the book schema.

    Args:
        payload: Decoded request body (anything JSON can produce)
        partial: If True, fields are optional (update); otherwise all
            eight are required (create)

    Returns:
        ValidationResult with either the validated mapping or the errors
    """
    model = BookUpdate if partial else BookCreate
    try:
        validated = model.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(errors=_format_errors(e))

    return ValidationResult(data=validated.model_dump(exclude_unset=True))


def require_valid_book(payload: Any, *, partial: bool = False) -> Dict[str, Any]:
    """
    Validate a payload and return the validated mapping.

    Raises:
        BookValidationError: With every violation found
    """
    result = validate_book(payload, partial=partial)
    if not result.is_valid:
        raise BookValidationError(result.errors)
    return result.data
