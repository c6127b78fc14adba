"""Axis-aligned bounding boxes and collision detection between game objects."""

from __future__ import annotations

import enum
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from loglog.vec import Vec3

logger = logging.getLogger(__name__)


@dataclass
class Aabb3d:
    """A 3D axis-aligned bounding box given by its minimum and maximum corners."""

    min: Vec3
    max: Vec3

    @classmethod
    def from_center(cls, center: Vec3, half_extents: Vec3) -> "Aabb3d":
        """Build a box around ``center``; negative half extents are made positive."""
        positive = half_extents.abs()
        return cls(min=center - positive, max=center + positive)

    def intersects(self, other: "Aabb3d") -> bool:
        """Return True if the boxes overlap or touch on every axis."""
        return (
            self.min.x <= other.max.x
            and self.max.x >= other.min.x
            and self.min.y <= other.max.y
            and self.max.y >= other.min.y
            and self.min.z <= other.max.z
            and self.max.z >= other.min.z
        )

    def center(self) -> Vec3:
        """Return the centre point of the box."""
        return (self.min + self.max) / 2.0

    def extents(self) -> Vec3:
        """Return the full size of the box along each axis."""
        return self.max - self.min

    def half_extents(self) -> Vec3:
        """Return half the size of the box along each axis."""
        return (self.max - self.min) / 2.0

    def update_center(self, new_center: Vec3) -> None:
        """Move the box so it is centred on ``new_center``, keeping its size."""
        half = self.half_extents()
        self.min = new_center - half
        self.max = new_center + half


class GameObjectType(enum.Enum):
    """Kinds of object that take part in collisions."""

    PLAYER = "player"
    LOG = "log"
    ROCK = "rock"


class CollisionEvent(enum.Enum):
    """Collisions that the game reacts to."""

    PLAYER_LOG = "player_log"


def detect_collisions(
    objects: Iterable[Tuple[GameObjectType, Aabb3d]],
) -> List[CollisionEvent]:
    """Check every pair of objects and report collisions involving the player.

    Pairs of the same type are ignored. For each intersecting pair, one
    ``PLAYER_LOG`` event is reported for each member of the pair that is
    the player.
    """
    events: List[CollisionEvent] = []
    for (type_a, box_a), (type_b, box_b) in itertools.combinations(list(objects), 2):
        if type_a == type_b or not box_a.intersects(box_b):
            continue
        logger.info(
            "Intersection detected between %r and %r",
            (type_a, box_a),
            (type_b, box_b),
        )
        events.extend(
            CollisionEvent.PLAYER_LOG
            for kind in (type_a, type_b)
            if kind is GameObjectType.PLAYER
        )
    return events