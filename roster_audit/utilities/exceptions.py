"""Roster audit exception hierarchy."""


class RosterAuditError(Exception):
    """Base exception for all roster audit errors."""


class ConfigurationError(RosterAuditError):
    """Configuration override file is missing or malformed."""


class WorkbookReadError(RosterAuditError):
    """A roster workbook could not be opened or parsed."""

    def __init__(self, file_name: str, message: str) -> None:
        self.file_name = file_name
        super().__init__(f"File {file_name} could not be read: {message}")


class AuditRunError(RosterAuditError):
    """The audit run failed and produced no result."""

    def __init__(self, file_name: str, cause: Exception) -> None:
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Audit failed while processing {file_name}: {cause}")


class EmptyExportError(RosterAuditError):
    """Requested export has no rows to write."""
