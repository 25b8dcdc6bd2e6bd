class PedigreeError(Exception):
    """Base exception for pedigree layout failures."""


class ValidationError(PedigreeError):
    """Raised when a dataset fails integrity checks. Carries every violation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Validation errors: {'; '.join(self.errors)}")


class DatasetFormatError(PedigreeError):
    """Raised when a dataset file cannot be read into individuals."""


class ConfigurationError(PedigreeError):
    """Raised when layout options are invalid."""
