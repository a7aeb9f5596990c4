"""Pseudonymous references for identifiers written to log lines.

Principal ids, token ids and email addresses never appear in logs verbatim.
Each is replaced by a short digest tagged with its kind, which is stable
enough to follow one principal through a log stream.
"""

import hashlib
from enum import Enum
from typing import Any

from ..shared.schemas.base import normalize_email


class RefKind(str, Enum):
    PRINCIPAL = "pid"
    EMAIL = "email"
    TOKEN = "jti"


def log_ref(value: Any, kind: RefKind = RefKind.PRINCIPAL) -> str:
    """Digest of ``value`` prefixed with its kind, e.g. ``pid-3f9a0c1b7e2d``.

    Addresses are normalized first so every spelling of one mailbox maps to
    the same reference.
    """
    text = "" if value is None else str(value).strip()
    if not text:
        return f"{kind.value}-none"
    if kind is RefKind.EMAIL:
        text = normalize_email(text)

    digest = hashlib.blake2s(text.encode("utf-8"), digest_size=6).hexdigest()
    return f"{kind.value}-{digest}"
