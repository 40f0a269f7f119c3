"""Error taxonomy shared by the reporting services."""


class SalesError(Exception):
    pass


class ValidationError(SalesError):
    """A request is missing or carries an invalid field; nothing was written."""


class StoreError(SalesError):
    """The persistence layer failed; the message is the driver's."""
