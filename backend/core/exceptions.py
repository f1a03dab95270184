class ImportFileError(Exception):
    """Raised when an uploaded import file cannot be read at all."""

    def __init__(self, filename, reason):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot read {filename or 'upload'}: {reason}")


class RowImportError(Exception):
    """Raised when a single import row fails validation."""

    def __init__(self, field, message, value=None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")
