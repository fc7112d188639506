"""Name tokenization for the similarity index."""

from __future__ import annotations


def tokenize(text: str) -> list[str]:
    """
    Split a name into lower-cased word tokens.

    Each whitespace-separated piece keeps only alphanumeric characters and
    underscores; pieces that end up empty are dropped. Order is preserved
    because term frequencies count repeated tokens.

    Examples:
        "Deploy Staging" → ["deploy", "staging"]
        "fix-login-bug" → ["fixloginbug"]
        "  -- " → []
    """
    tokens = []
    for piece in text.lower().split():
        cleaned = "".join(ch for ch in piece if ch.isalnum() or ch == "_")
        if cleaned:
            tokens.append(cleaned)
    return tokens
