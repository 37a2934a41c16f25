"""Exception types raised along the order webhook pipeline."""


class DropOrdersError(Exception):
    """Base class for all errors raised by this package."""


class PayloadError(DropOrdersError):
    """Order payload could not be parsed or validated."""


class DatastoreError(DropOrdersError):
    """A read or write against the datastore failed."""


class DuplicateParticipationError(DatastoreError):
    """A participation row for (member, drop, order) already exists."""


class MailerError(DropOrdersError):
    """The outbound email provider rejected or failed a send."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
