class ApplicationError(Exception):
    """Base class for errors that terminate an admission review.

    The webhook renders these as a plain-text response carrying the error
    message and `status_code`.
    """

    status_code = 500


class BodyReadError(ApplicationError):
    pass


class DecodeError(ApplicationError):
    pass


class SchemaMismatchError(DecodeError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected.kind} with {expected} but got {actual}"
        )


class MissingRequestError(ApplicationError):
    pass


class UnsupportedResourceError(ApplicationError):
    status_code = 400


class EncodeError(ApplicationError):
    pass
