# /gradeledger/core/errors.py

"""
Error taxonomy shared by the services and translated to HTTP status codes by
the routers.

- RecordValidationError: bad input or a duplicate identity key. Raised before
  anything is written.
- RemoteStoreError: the relational backend failed. The transaction has been
  rolled back and the in-memory view is unchanged.
- PersistenceDegradation: one of the local persistence layers failed.
- ExportError: a document could not be produced. No file is left behind.
- NotAuthenticatedError: the operation needs a signed-in session.
"""


class GradeLedgerError(Exception):
    """Base class for every error raised on purpose by this package."""


class RecordValidationError(GradeLedgerError, ValueError):
    def __init__(self, message: str, duplicate: bool = False):
        super().__init__(message)
        self.duplicate = duplicate


class RemoteStoreError(GradeLedgerError):
    pass


class PersistenceDegradation(GradeLedgerError):
    pass


class ExportError(GradeLedgerError):
    pass


class NotAuthenticatedError(GradeLedgerError):
    pass
