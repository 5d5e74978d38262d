class DDNSError(Exception):
    """Base class for reconciliation failures.

    Batch-level errors carry the HTTP status the orchestrator answers with;
    per-domain errors are caught and folded into a `DomainResult` instead.
    """
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def kind(self):
        return self.__class__.__name__


# Batch-fatal: reported once, no domain processed.

class MissingParameters(DDNSError):
    pass

class NoValidAddress(DDNSError):
    pass

class AuthenticationFailed(DDNSError):
    status_code = 401


# Per-domain / per-family: recorded, never fatal to the batch.

class InvalidDomain(DDNSError):
    pass

class ZoneNotFound(DDNSError):
    pass

class RecordLookupFailed(DDNSError):
    pass

class RecordWriteFailed(DDNSError):
    pass

class AmbiguousRecord(DDNSError):
    pass

class RecordNotFound(DDNSError):
    status_code = 404
