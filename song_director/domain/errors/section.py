"""Section input errors.

Raised when a control client sends a letter or digit outside the fixed
alphabet. The store is never touched when this error is raised.
"""

from song_director.domain.exceptions import SongDirectorError


class InvalidSectionInputError(SongDirectorError):
    """Raised when a section letter or number payload is malformed.

    Attributes:
        field: Name of the offending input (section_type, section_number).
        value: The rejected raw value.
    """

    def __init__(self, field: str, value: object, reason: str = "") -> None:
        """Initialize invalid input error.

        Args:
            field: Name of the offending input.
            value: The rejected raw value.
            reason: Optional explanation appended to the message.
        """
        self.field = field
        self.value = value
        message = f"Invalid {field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
