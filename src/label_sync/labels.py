"""Label records and the equality rules used during reconciliation.

Two helpers answer different questions:
- `equals`: are the two labels identical in every field?
- `same_definition`: do the two labels configure the same label (by name)?
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Label:
    name: str
    color: str
    description: str = ""
    default: bool = False

    @classmethod
    def from_github(cls, payload: Mapping[str, Any]) -> Label:
        """Build a label from a GitHub REST label object."""

        name = payload.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("Invalid label response: missing name")

        color = payload.get("color")
        description = payload.get("description")
        return cls(
            name=name,
            color=color if isinstance(color, str) else "",
            description=description if isinstance(description, str) else "",
            default=payload.get("default") is True,
        )

    def to_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "default": self.default,
        }


def hydrate(labels: Mapping[str, Any]) -> list[Label]:
    """Expand a label manifest into fully populated label records.

    Values are either a bare color string or an object with `color` and an
    optional `description`. Objects may be plain mappings or any value exposing
    those attributes (e.g. validated manifest models).
    """

    hydrated: list[Label] = []
    for name, value in labels.items():
        if isinstance(value, str):
            hydrated.append(Label(name=name, color=value))
            continue

        if isinstance(value, Mapping):
            color = value.get("color")
            description = value.get("description")
        else:
            color = getattr(value, "color", None)
            description = getattr(value, "description", None)

        if not isinstance(color, str):
            raise ValueError(f"Label {name!r} is missing a color")
        hydrated.append(
            Label(
                name=name,
                color=color,
                description=description if isinstance(description, str) else "",
            )
        )
    return hydrated


def equals(a: Label, b: Label) -> bool:
    return (
        a.name == b.name
        and a.description == b.description
        and a.color == b.color
        and a.default == b.default
    )


def same_definition(a: Label, b: Label) -> bool:
    return a.name == b.name


def label_names(labels: list[Label]) -> list[str]:
    return [label.name for label in labels]
