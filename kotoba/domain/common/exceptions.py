"""
Errors raised by the learning domain.

Every error class carries a stable ``code``. The API returns it next to the
message so clients can tell failures apart without parsing text. Which HTTP
status a failure gets depends only on the base class it derives from.
"""


class DomainError(Exception):
    """Base class of all learning-progress failures."""

    code = "domain_error"

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """A request names a value the domain cannot accept."""

    code = "invalid_input"

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, {"field": field, "value": value} if field else None)


class EntityNotFoundError(DomainError):
    """
    A record does not exist for the requesting user.

    Records of other users are reported the same way, so an id never reveals
    whether someone else's record exists.
    """

    code = "not_found"

    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")


class EntityConflictError(DomainError):
    """The user already has a record for this course or vocabulary item."""

    code = "conflict"


class BusinessRuleViolationError(DomainError):
    """The record's current state does not allow the requested change."""

    code = "invalid_state_transition"

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message, {"rule": rule})


class InvariantViolationError(DomainError):
    """A record was loaded or built in a state it can never legally be in."""

    code = "invariant_violation"

    def __init__(self, entity: str, invariant: str) -> None:
        super().__init__(f"{entity} is inconsistent: {invariant}")
