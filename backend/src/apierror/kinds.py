"""Classified error taxonomy.

Each ErrorKind pairs a stable numeric code (the value clients see on the
wire) with a default message and the exception class raised for it. Lookups
by code or by exception never fail: anything unrecognized resolves to
UNKNOWN_SERVER_ERROR so that payloads from newer servers still decode.
"""

from enum import Enum

from apierror.exceptions import (
    ApiError,
    CoordinatorNotAvailableError,
    CorruptRecordError,
    InvalidConfigurationError,
    InvalidFetchSizeError,
    InvalidRequestError,
    InvalidTopicError,
    LeaderNotAvailableError,
    NetworkError,
    NotLeaderOrFollowerError,
    OffsetOutOfRangeError,
    PolicyViolationError,
    RecordTooLargeError,
    RequestTimedOutError,
    RetriableError,
    ThrottlingQuotaExceededError,
    TopicAuthorizationError,
    TopicExistsError,
    UnknownServerError,
    UnknownTopicOrPartitionError,
    UnsupportedVersionError,
)
from apierror.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(Enum):
    """Finite set of classified failures, ordered by declaration."""

    UNKNOWN_SERVER_ERROR = (
        -1,
        "The server experienced an unexpected error when processing the request.",
        UnknownServerError,
    )
    NONE = (0, None, None)
    OFFSET_OUT_OF_RANGE = (
        1,
        "The requested offset is not within the range of offsets maintained by the server.",
        OffsetOutOfRangeError,
    )
    CORRUPT_MESSAGE = (
        2,
        "This message has failed its CRC checksum, exceeds the valid size, has a null key "
        "for a compacted topic, or is otherwise corrupt.",
        CorruptRecordError,
    )
    UNKNOWN_TOPIC_OR_PARTITION = (
        3,
        "This server does not host this topic-partition.",
        UnknownTopicOrPartitionError,
    )
    INVALID_FETCH_SIZE = (4, "The requested fetch size is invalid.", InvalidFetchSizeError)
    LEADER_NOT_AVAILABLE = (
        5,
        "There is no leader for this topic-partition as we are in the middle of a "
        "leadership election.",
        LeaderNotAvailableError,
    )
    NOT_LEADER_OR_FOLLOWER = (
        6,
        "For requests intended only for the leader, this error indicates that the broker "
        "is not the current leader. For requests intended for any replica, this error "
        "indicates that the broker is not a replica of the topic partition.",
        NotLeaderOrFollowerError,
    )
    REQUEST_TIMED_OUT = (7, "The request timed out.", RequestTimedOutError)
    MESSAGE_TOO_LARGE = (
        10,
        "The request included a message larger than the max message size the server "
        "will accept.",
        RecordTooLargeError,
    )
    NETWORK_EXCEPTION = (
        13,
        "The server disconnected before a response was received.",
        NetworkError,
    )
    COORDINATOR_NOT_AVAILABLE = (
        15,
        "The coordinator is not available.",
        CoordinatorNotAvailableError,
    )
    INVALID_TOPIC_EXCEPTION = (
        17,
        "The request attempted to perform an operation on an invalid topic.",
        InvalidTopicError,
    )
    TOPIC_AUTHORIZATION_FAILED = (29, "Topic authorization failed.", TopicAuthorizationError)
    UNSUPPORTED_VERSION = (35, "The version of API is not supported.", UnsupportedVersionError)
    TOPIC_ALREADY_EXISTS = (36, "Topic with this name already exists.", TopicExistsError)
    INVALID_CONFIG = (40, "Configuration is invalid.", InvalidConfigurationError)
    INVALID_REQUEST = (
        42,
        "This most likely occurs because of a request being malformed by the client "
        "library or the message was sent to an incompatible broker. See the broker logs "
        "for more details.",
        InvalidRequestError,
    )
    POLICY_VIOLATION = (
        44,
        "Request parameters do not satisfy the configured policy.",
        PolicyViolationError,
    )
    THROTTLING_QUOTA_EXCEEDED = (
        89,
        "The throttling quota has been exceeded.",
        ThrottlingQuotaExceededError,
    )

    def __init__(
        self,
        code: int,
        default_message: str | None,
        exception_class: type[ApiError] | None,
    ) -> None:
        self.code = code
        self._default_message = default_message
        self.exception_class = exception_class

    @property
    def default_message(self) -> str:
        """Canonical text for this kind. NONE has no exception, so it uses its name."""
        return self._default_message if self._default_message is not None else self.name

    @property
    def http_status(self) -> int:
        if self.exception_class is None:
            return 200
        return self.exception_class.status_code

    @property
    def retriable(self) -> bool:
        return self.exception_class is not None and issubclass(
            self.exception_class, RetriableError
        )

    def to_exception(self, message: str | None = None) -> ApiError | None:
        """Build this kind's exception, using the default message when none is given.

        Returns None for NONE, which has nothing to raise.
        """
        if self.exception_class is None:
            return None
        return self.exception_class(message if message is not None else self.default_message)

    @classmethod
    def for_code(cls, code: int) -> "ErrorKind":
        """Resolve a numeric code. Unknown codes degrade to UNKNOWN_SERVER_ERROR."""
        kind = _BY_CODE.get(code)
        if kind is None:
            logger.warning("unknown_error_code", code=code)
            return cls.UNKNOWN_SERVER_ERROR
        return kind

    @classmethod
    def for_exception(cls, exc: BaseException) -> "ErrorKind":
        """Classify an exception by the nearest registered class in its MRO."""
        for klass in type(exc).__mro__:
            kind = _BY_EXCEPTION.get(klass)
            if kind is not None:
                return kind
        return cls.UNKNOWN_SERVER_ERROR

    def __structlog__(self) -> str:
        return self.name


def index_by_code[K: Enum](kinds: type[K]) -> dict[int, K]:
    """Map each member's ``code`` to the member.

    Raises:
        ValueError: If two members share a code.
    """
    by_code: dict[int, K] = {}
    for kind in kinds:
        code = kind.code  # type: ignore[attr-defined]
        if code in by_code:
            raise ValueError(
                f"Code {code} for error {kind.name} has already been used "
                f"by {by_code[code].name}"
            )
        by_code[code] = kind
    return by_code


_BY_CODE = index_by_code(ErrorKind)
_BY_EXCEPTION: dict[type[BaseException], ErrorKind] = {
    kind.exception_class: kind for kind in ErrorKind if kind.exception_class is not None
}
