from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(text: str | None) -> str:
    """Canonical comparison form: lowercase ASCII letters and digits only.

    ``None`` becomes ``""``. Applying it twice changes nothing.
    """
    if text is None:
        return ""
    return _NON_ALNUM.sub("", text.lower())
