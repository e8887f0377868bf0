"""Error taxonomy shared by the look manager, crew roster and production service."""


class CallSheetError(Exception):
    """Base class for every per-operation failure."""


class ValidationError(CallSheetError):
    """Bad input shape or content. Raised before any store mutation."""


class RecordNotFound(CallSheetError):
    """The addressed production, crew member or look does not exist."""

    def __init__(self, table: str, record_id):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} {record_id} not found")


class StoreUnavailable(CallSheetError):
    """Transient I/O failure talking to the record store or object storage."""
