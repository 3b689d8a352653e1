"""
Selection state and matcher construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from silence_manager.api.models import Matcher
from silence_manager.core.constants import NO_MATCHERS_PREVIEW


class SelectionState:
    """Per-label chosen value, independent for every label.

    Membership of the chosen value in the label's cache is checked by the
    caller (the panel) at the time of choice.
    """

    def __init__(self) -> None:
        self._selected: dict[str, str] = {}

    def set_selection(self, label: str, value: str | None) -> bool:
        """Set or clear a label's selection.

        Returns:
            True if the selection changed.
        """
        if value is None:
            return self._selected.pop(label, None) is not None
        if self._selected.get(label) == value:
            return False
        self._selected[label] = value
        return True

    def get_selection(self, label: str) -> str | None:
        return self._selected.get(label)

    def clear(self) -> None:
        self._selected.clear()

    def retain(self, labels: Iterable[str]) -> None:
        """Drop selections for labels that are no longer configured."""
        keep = set(labels)
        for label in [name for name in self._selected if name not in keep]:
            del self._selected[label]

    def as_dict(self) -> dict[str, str]:
        return dict(self._selected)

    def __len__(self) -> int:
        return len(self._selected)


def build_matchers(labels: Sequence[str], selection: SelectionState) -> list[Matcher]:
    """Build equality matchers in configured label order.

    Labels without a selection are skipped; there is no wildcard matcher,
    so the result may be empty.
    """
    matchers: list[Matcher] = []
    for label in labels:
        value = selection.get_selection(label)
        if value:
            matchers.append(Matcher(name=label, value=value, is_regex=False, is_equal=True))
    return matchers


def format_matchers_preview(matchers: Sequence[Matcher]) -> str:
    """One ``name="value"`` line per matcher, or a hint when there are none."""
    if not matchers:
        return NO_MATCHERS_PREVIEW
    return "\n".join(matcher.to_selector() for matcher in matchers)
