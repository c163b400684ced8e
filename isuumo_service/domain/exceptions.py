"""
Domain exceptions
"""


class SearchError(Exception):
    """Base class for errors raised by the search core"""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class BadRequestError(SearchError):
    """Malformed request: bad bucket index, empty polygon, missing filters"""

    status_code = 400


class NotFoundError(SearchError):
    """Referenced entity does not exist"""

    status_code = 404


class InternalError(SearchError):
    """Storage or runtime failure"""

    status_code = 500
