"""Message kind and failure classification for streams"""

import re
from typing import Any

from websockets.exceptions import ConnectionClosed

from rofex.domain.models.enums import WSMessageType

# Close codes meaning the peer ended the stream on purpose
NORMAL_CLOSURE = 1000
GOING_AWAY = 1001
ABNORMAL_CLOSURE = 1006

NON_RECOVERABLE_CLOSE_CODES = frozenset({NORMAL_CLOSURE, GOING_AWAY})

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    TimeoutError,
    ConnectionResetError,
    ConnectionRefusedError,
    BrokenPipeError,
    EOFError,
)

TRANSIENT_MARKERS = (
    "timeout",
    "timed out",
    "connection reset",
    "broken pipe",
    "unreachable",
    "refused",
)

# Whole word only: "thereof" is not an end of file
EOF_WORD = re.compile(r"\beof\b")


def normalize_type(value: Any) -> str:
    """Lower-cased, stripped ``type`` discriminant ("" when missing)"""
    if value is None:
        return ""
    if isinstance(value, WSMessageType):
        return value.value
    return str(value).strip().lower()


def matches_kind(message: Any, kind: WSMessageType | str) -> bool:
    """True if ``message`` is a JSON object of the given kind"""
    if not isinstance(message, dict):
        return False
    return normalize_type(message.get("type")) == normalize_type(kind)


def close_code(err: BaseException) -> int | None:
    """Close code carried by a websockets ConnectionClosed, else None

    A connection that dropped without a close frame counts as abnormal.
    """
    if not isinstance(err, ConnectionClosed):
        return None
    if err.rcvd is None:
        return ABNORMAL_CLOSURE
    return err.rcvd.code


def is_recoverable_error(err: BaseException | None) -> bool:
    """Decide whether a stream failure is worth reconnecting for

    Normal and going-away closures are final; any other close code is
    recoverable, as are transient network errors. Everything else is
    treated as permanent.
    """
    if err is None:
        return False

    code = close_code(err)
    if code is not None:
        return code not in NON_RECOVERABLE_CLOSE_CODES

    if isinstance(err, TRANSIENT_ERRORS):
        return True

    text = str(err).lower()
    if EOF_WORD.search(text):
        return True
    return any(marker in text for marker in TRANSIENT_MARKERS)
