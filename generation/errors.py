"""
Validation failures for generated assignment content.

Every failure keeps the text it was looking at (raw_text) so callers can log
it or retry generation with a different prompt.
"""

from typing import List, Optional


class AssignmentValidationError(ValueError):
    """Base class: the generator's reply cannot become an AssignmentRecord."""

    kind = "AssignmentValidationError"

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": str(self), "raw_text": self.raw_text}


class MalformedEnvelope(AssignmentValidationError):
    """Nothing left after stripping code fences."""

    kind = "MalformedEnvelope"


class MalformedJSON(AssignmentValidationError):
    """Text is present but does not decode to a JSON object."""

    kind = "MalformedJSON"


class MissingField(AssignmentValidationError):
    kind = "MissingField"

    def __init__(self, names: List[str], raw_text: Optional[str] = None):
        self.names = list(names)
        super().__init__(f"Missing required fields: {', '.join(self.names)}", raw_text)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["fields"] = self.names
        return data


class InvalidField(AssignmentValidationError):
    """A required field is present but has an unusable value."""

    kind = "InvalidField"

    def __init__(self, name: str, reason: str, raw_text: Optional[str] = None):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid value for '{name}': {reason}", raw_text)


class TaskCountDeficit(AssignmentValidationError):
    """Fewer tasks than numberOfTasks declares. Not recoverable without inventing tasks."""

    kind = "TaskCountDeficit"

    def __init__(self, expected: int, actual: int, raw_text: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} tasks, but found {actual} in tasks array",
            raw_text,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(expected=self.expected, actual=self.actual)
        return data
