class LibraryError(ValueError):
    """Base for errors the services raise on purpose.

    Subclasses ValueError so callers that only know about ValueError keep
    working; ``status_code`` is what the JSON controllers answer with.
    """

    status_code = 400


class ValidationError(LibraryError):
    status_code = 400


class NotFoundError(LibraryError):
    status_code = 404


class ConflictError(LibraryError):
    status_code = 409
