"""Swimlane model."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Swimlane:
    """
    Represents a named horizontal track that groups projects.
    """

    #: The swimlane ID.
    id: str
    #: The display name.
    name: str
    #: Band color, as a ``#RRGGBB`` string.
    color: str
    #: Vertical position; lower values are drawn higher up.
    order: int = 0


def sort_swimlanes(swimlanes: Iterable[Swimlane]) -> list[Swimlane]:
    """
    Sort swimlanes by :attr:`Swimlane.order`.

    The sort is stable, so lanes with the same order keep their data order.

    Args:
        swimlanes: Swimlanes to sort

    Returns:
        A new sorted list

    """
    return sorted(swimlanes, key=lambda lane: lane.order)
