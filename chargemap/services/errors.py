"""Base exception for domain errors raised by the service layer."""


class ChargemapError(Exception):
    """Domain error carrying the HTTP status the API answers with"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ChargemapError):
    status_code = 404


class IncorrectFormatError(ChargemapError):
    status_code = 400


class UnprocessableError(ChargemapError):
    status_code = 422
