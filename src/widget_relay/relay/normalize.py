"""Turn whatever a workflow endpoint returned into one display string.

Upstream workflows are configured by the customer, so the reply can arrive
as a bare string or as an object carrying the text under one of several
field names. The probe order is fixed:

1. the payload itself, when it is a string;
2. ``response``;
3. ``output``;
4. ``message``;
5. ``content``;
6. otherwise the whole payload serialized as JSON.

A probed field only counts when it holds a non-empty value. An empty payload
(``None``, ``""``, ``0``) yields ``FALLBACK_REPLY``.
"""

import json
from typing import Any

REPLY_FIELDS = ("response", "output", "message", "content")

FALLBACK_REPLY = "I apologize, but I encountered an error processing your request."


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def extract_reply(payload: Any) -> str:
    if isinstance(payload, dict):
        for field in REPLY_FIELDS:
            value = payload.get(field)
            if value:
                return _as_text(value)
        return _as_text(payload)
    if isinstance(payload, list):
        return _as_text(payload)
    if not payload:
        return FALLBACK_REPLY
    return _as_text(payload)
