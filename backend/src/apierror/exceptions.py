"""Classified exceptions raised by request handlers and translated by main.py.

Every ErrorKind except NONE has exactly one exception class here. Handlers
raise them to signal a classified failure; exception handlers in main.py
turn them back into an ErrorResult and the standard error envelope:
{"error": {"code": ..., "name": "...", "message": "..."}}.
"""


class ApiError(Exception):
    """Base class for all classified exceptions."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RetriableError(ApiError):
    """A transient failure; the same request may succeed if sent again."""


class UnknownServerError(ApiError):
    status_code = 500


class OffsetOutOfRangeError(ApiError):
    status_code = 416


class CorruptRecordError(RetriableError):
    pass


class UnknownTopicOrPartitionError(RetriableError):
    status_code = 404


class InvalidFetchSizeError(ApiError):
    pass


class LeaderNotAvailableError(RetriableError):
    status_code = 503


class NotLeaderOrFollowerError(RetriableError):
    status_code = 503


class RequestTimedOutError(RetriableError):
    status_code = 504


class RecordTooLargeError(ApiError):
    status_code = 413


class NetworkError(RetriableError):
    status_code = 502


class CoordinatorNotAvailableError(RetriableError):
    status_code = 503


class InvalidTopicError(ApiError):
    pass


class TopicAuthorizationError(ApiError):
    status_code = 403


class UnsupportedVersionError(ApiError):
    pass


class TopicExistsError(ApiError):
    status_code = 409


class InvalidConfigurationError(ApiError):
    pass


class InvalidRequestError(ApiError):
    pass


class PolicyViolationError(ApiError):
    pass


class ThrottlingQuotaExceededError(RetriableError):
    status_code = 429
