"""Repair of Spanish subtitle text mis-decoded as Latin-1/CP1252.

KissKH subtitles are UTF-8, but some uploads were saved after a wrong
decode, so ``á`` (``C3 A1``) shows up as ``Ã¡``.  The table below maps the
known corrupted pairs back.  A text that legitimately contains ``Ã¡`` would
be altered too; that is accepted.
"""

from __future__ import annotations

import base64

_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("Ã¡", "á"),
    ("Ã©", "é"),
    ("Ã\u00ad", "í"),
    ("Ã³", "ó"),
    ("Ãº", "ú"),
    ("Ã‘", "Ñ"),  # 0x91 read as CP1252
    ("Ã±", "ñ"),
    ("Â¿", "¿"),
    ("Â¡", "¡"),
    ("Ã¼", "ü"),
)

VTT_DATA_URI_PREFIX = "data:text/vtt;charset=utf-8;base64,"


def repair_spanish_text(text: str) -> str:
    """Replace the known mojibake sequences with the intended characters."""
    for broken, fixed in _REPLACEMENTS:
        text = text.replace(broken, fixed)
    return text


def to_vtt_data_uri(text: str) -> str:
    """Encode subtitle text as a self-contained base64 ``data:`` URI."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"{VTT_DATA_URI_PREFIX}{encoded}"
