"""Errors raised while assigning slugs"""


class InvalidOption(ValueError):
    """Slug options that can never produce a slug. Raised before the record is touched."""

    @classmethod
    def missing_source_field(cls) -> "InvalidOption":
        return MissingSourceField("Could not determine which fields should be sluggified")

    @classmethod
    def missing_slug_field(cls) -> "InvalidOption":
        return MissingSlugField("Could not determine in which field the slug should be saved")

    @classmethod
    def invalid_maximum_length(cls) -> "InvalidOption":
        return InvalidMaximumLength("Maximum length should be greater than zero")

    @classmethod
    def invalid_separator(cls) -> "InvalidOption":
        return InvalidSeparator("Separator should not be empty")


class MissingSourceField(InvalidOption):
    pass


class MissingSlugField(InvalidOption):
    pass


class InvalidMaximumLength(InvalidOption):
    pass


class InvalidSeparator(InvalidOption):
    pass


class SlugAttemptsExhausted(RuntimeError):
    """Every suffixed candidate up to the configured ceiling already exists."""

    def __init__(self, candidate: str, max_attempts: int):
        super().__init__(f"No free slug for '{candidate}' after {max_attempts} attempts")
        self.candidate = candidate
        self.max_attempts = max_attempts
