"""Request payload construction for the generateContent endpoint."""

from __future__ import annotations

from typing import Any, Dict

__all__ = ["RAW_TAG", "SYSTEM_PROMPT", "build_payload", "escape_xml", "wrap_raw"]

RAW_TAG = "raw"

SYSTEM_PROMPT = (
    "Linguistically polish the text in <raw>. Preserve the author's voice, personality, tone, and style "
    "-- elevate, never replace. Find more idiomatic phrasing where natural, eliminate bloat, and fix "
    "grammatical, lexical, and punctuation errors. Do not restructure, reconstruct, or re-engineer the "
    "content. Every edit should unseal, not substitute. Where the author reached for a phrase and fell "
    "short, complete the arch they were already building -- reveal what they were on the verge of "
    "writing, never impose what they weren't. The goal is not correction but emancipation: widen the "
    "bottleneck between thought and expression until what arrives on the page is proportionate to what "
    "was luminous in the mind. Surgical, enriching changes only."
)

# Ampersand must stay first so later replacements are not escaped twice.
_XML_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text: str) -> str:
    """Replace the five XML-significant characters with their entities.

    Existing entities are not recognised, so ``&amp;`` becomes ``&amp;amp;``.
    """

    for char, entity in _XML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def wrap_raw(text: str) -> str:
    return f"<{RAW_TAG}>{escape_xml(text)}</{RAW_TAG}>"


def build_payload(system_prompt: str, raw: str) -> Dict[str, Any]:
    """Return the JSON-ready request body for ``raw``."""

    return {
        "systemInstruction": {
            "parts": [{"text": system_prompt}],
        },
        "contents": [
            {"parts": [{"text": wrap_raw(raw)}]},
        ],
    }
