"""Failure taxonomy and the classifier that sanitizes errors for the user.

Everything below the classifier (provider SDKs, the JSON extractor) raises
detailed internal errors. ``classify_error`` is the single point where those
are turned into a :class:`ClassifiedError` with a fixed, user-safe message.
"""

import logging

import anthropic
import httpx

from grounded_search.data import ErrorKind

logger = logging.getLogger(__name__)

QUOTA_MARKERS = ("429", "resource_exhausted", "rate_limit_error", "quota")
AUTH_MARKERS = (
    "401",
    "403",
    "api_key_invalid",
    "permission_denied",
    "authentication_error",
    "api key not valid",
)
QUOTA_STATUS_CODES = frozenset({429})
AUTH_STATUS_CODES = frozenset({401, 403})

MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.QUOTA_EXCEEDED: (
        "APIの利用上限に達しました。しばらく待ってから再度お試しください。"
    ),
    ErrorKind.UNAUTHENTICATED: (
        "APIキーが無効か、設定されていません。設定からAPIキーを確認してください。"
    ),
    ErrorKind.MALFORMED_RESPONSE: "情報の解析に失敗しました。もう一度お試しください。",
    ErrorKind.NETWORK: "ネットワークに接続できませんでした。接続を確認して再度お試しください。",
    ErrorKind.UNKNOWN: "エラーが発生しました。しばらくしてから再度お試しください。",
}


class ClassifiedError(Exception):
    """A failure that is safe to show to the user.

    Args:
        kind: Failure category.
        message: User-facing message (defaults to the fixed message for *kind*).
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or MESSAGES[kind]
        super().__init__(self.message)


class ExtractionError(ValueError):
    """No valid JSON object could be recovered from model output."""


class MissingCredentialError(RuntimeError):
    """No API credential is configured for the call."""


def _status_code(exc: BaseException) -> int | None:
    """Return the HTTP status carried by a provider SDK error, if any."""
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _is_transport_error(exc: BaseException) -> bool:
    return isinstance(
        exc,
        (httpx.TransportError, anthropic.APIConnectionError, TimeoutError, ConnectionError),
    )


def classify_error(
    exc: BaseException, *, fallback_message: str | None = None
) -> ClassifiedError:
    """Map any failure to one of the five user-facing error kinds.

    Checks run in order and the first match wins: quota exhaustion,
    invalid or missing credentials, unparseable model output, transport
    failure, anything else.

    Args:
        exc: The failure to classify.
        fallback_message: Message used for ``Unknown`` instead of the generic one.

    Returns:
        A ClassifiedError whose message never includes the upstream error text.
    """
    if isinstance(exc, ClassifiedError):
        return exc

    status = _status_code(exc)
    text = str(exc).lower()

    if status in QUOTA_STATUS_CODES or any(marker in text for marker in QUOTA_MARKERS):
        return ClassifiedError(ErrorKind.QUOTA_EXCEEDED)
    if (
        isinstance(exc, MissingCredentialError)
        or status in AUTH_STATUS_CODES
        or any(marker in text for marker in AUTH_MARKERS)
    ):
        return ClassifiedError(ErrorKind.UNAUTHENTICATED)
    if isinstance(exc, ExtractionError):
        return ClassifiedError(ErrorKind.MALFORMED_RESPONSE)
    if _is_transport_error(exc):
        return ClassifiedError(ErrorKind.NETWORK)

    logger.debug("Unclassified error %s: %s", type(exc).__name__, exc)
    return ClassifiedError(ErrorKind.UNKNOWN, fallback_message)
