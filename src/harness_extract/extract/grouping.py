"""Cluster positioned text tokens into printed table rows."""

from __future__ import annotations

from collections.abc import Sequence

from harness_extract.config import DEFAULT_CALIBRATION
from harness_extract.domain import TextToken


class _RowGroup:
    __slots__ = ("tokens", "_y_sum")

    def __init__(self, token: TextToken) -> None:
        self.tokens: list[TextToken] = [token]
        self._y_sum = token.y

    @property
    def mean_y(self) -> float:
        return self._y_sum / len(self.tokens)

    def add(self, token: TextToken) -> None:
        self.tokens.append(token)
        self._y_sum += token.y


def group_rows(
    tokens: Sequence[TextToken],
    *,
    y_tolerance: float = DEFAULT_CALIBRATION.row_y_tolerance,
) -> list[list[TextToken]]:
    """Return rows of tokens in discovery order, each sorted left to right.

    Tokens are scanned top-to-bottom then left-to-right. A token joins the
    first existing row whose running mean y lies within ``y_tolerance``,
    otherwise it opens a new row.
    """

    if not tokens:
        return []

    groups: list[_RowGroup] = []
    for token in sorted(tokens, key=lambda tok: (-tok.y, tok.x)):
        target = next(
            (group for group in groups if abs(group.mean_y - token.y) <= y_tolerance),
            None,
        )
        if target is None:
            groups.append(_RowGroup(token))
        else:
            target.add(token)

    return [sorted(group.tokens, key=lambda tok: tok.x) for group in groups]


__all__ = ["group_rows"]
