"""
Prompt Builder - renders instructions, recent history and the new entry into one prompt.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

DEFAULT_ROLE_LABELS = {"user": "User", "assistant": "Assistant"}


def recent_turns(history: Sequence[Mapping[str, Any]], k: int) -> List[Mapping[str, Any]]:
    """Last ``k`` turns of ``history`` in their original order."""
    if k <= 0:
        return []
    return list(history[-k:])


def render_history(
    history: Sequence[Mapping[str, Any]],
    k: int = 8,
    role_labels: Optional[Dict[str, str]] = None,
) -> str:
    """
    Render the most recent ``k`` turns as ``Role: content`` lines.

    Returns an empty string when there is nothing to render, otherwise a
    block introduced by ``Previous conversation context:``.
    """
    labels = role_labels or DEFAULT_ROLE_LABELS
    turns = recent_turns(history, k)
    if not turns:
        return ""
    lines = [
        f"{labels.get(turn.get('role'), str(turn.get('role', '')).title())}: {turn.get('content', '')}"
        for turn in turns
    ]
    return "\n\nPrevious conversation context:\n" + "\n".join(lines) + "\n"


def build_prompt(
    template: str,
    history: Sequence[Mapping[str, Any]],
    entry_text: str,
    k: int = 8,
    role_labels: Optional[Dict[str, str]] = None,
) -> str:
    """
    Build a single prompt string.

    Args:
        template: Instruction text with ``{context}`` and ``{entry}`` placeholders
        history: Prior turns, oldest first, each with ``role`` and ``content``
        entry_text: The new user entry, inserted verbatim
        k: Maximum number of history turns to include
        role_labels: Display label per role (e.g. Patient / Doctor)

    Returns:
        The rendered prompt. Pure: same inputs, same output.
    """
    return template.format(
        context=render_history(history, k, role_labels),
        entry=entry_text,
    )
