"""A minimal world of actors and the subsystem that tracks emotion components in it."""

from __future__ import annotations

import logging
import math
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from emotionengine.emotion_data import EmotionLibrary
from emotionengine.tags import GameplayTag, TagContainer

logger = logging.getLogger(__name__)

Vector = tuple[float, float, float]
Vector2D = tuple[float, float]

_LINE_OF_SIGHT_TOLERANCE = 1.0


@dataclass(eq=False)
class Actor:
    """An object placed in a world that owns components.

    An actor with a positive ``blocking_radius`` blocks line traces as a sphere.
    """

    name: str = "Actor"
    location: Vector = (0.0, 0.0, 0.0)
    components: list[Any] = field(default_factory=list)
    blocking_radius: float = 0.0
    world: Optional["World"] = field(default=None, repr=False)

    def add_component(self, component: Any) -> Any:
        """Attach ``component`` to this actor and return it."""
        component.owner = self
        self.components.append(component)
        return component

    def find_component(self, component_type: type) -> Any:
        """Return the first attached component of ``component_type``, or None."""
        return next((c for c in self.components if isinstance(c, component_type)), None)

    def distance_to(self, location: Vector) -> float:
        """Return the distance from this actor to ``location``."""
        return math.dist(self.location, location)


class World:
    """A collection of actors with a clock, a line-trace model and an emotion subsystem."""

    def __init__(
        self, name: str = "World", default_emotion_library: Optional[EmotionLibrary] = None
    ) -> None:
        self.name = name
        self.actors: list[Actor] = []
        self.time_seconds: float = 0.0
        self.player_pawn: Optional[Actor] = None
        self.subsystem = EmotionSubsystem(self, default_emotion_library)

    def spawn(self, actor: Actor) -> Actor:
        """Place ``actor`` in this world and return it."""
        actor.world = self
        if actor not in self.actors:
            self.actors.append(actor)
        return actor

    def line_trace(
        self, start: Vector, end: Vector, ignored: Iterable[Actor] = ()
    ) -> Optional[Vector]:
        """Return the first point where the segment hits a blocking actor, or None."""
        ignored_ids = {id(actor) for actor in ignored if actor is not None}
        direction = tuple(e - s for s, e in zip(start, end))
        a = sum(d * d for d in direction)
        best_t: Optional[float] = None
        for actor in self.actors:
            radius = actor.blocking_radius
            if radius <= 0.0 or id(actor) in ignored_ids:
                continue
            offset = tuple(s - c for s, c in zip(start, actor.location))
            c = sum(o * o for o in offset) - radius * radius
            if c <= 0.0:
                t: Optional[float] = 0.0
            elif a == 0.0:
                continue
            else:
                b = 2.0 * sum(o * d for o, d in zip(offset, direction))
                disc = b * b - 4.0 * a * c
                if disc < 0.0:
                    continue
                t = (-b - math.sqrt(disc)) / (2.0 * a)
                if not 0.0 <= t <= 1.0:
                    t = None
            if t is not None and (best_t is None or t < best_t):
                best_t = t
        if best_t is None:
            return None
        return tuple(s + d * best_t for s, d in zip(start, direction))  # type: ignore[return-value]

    def has_line_of_sight(
        self, start: Vector, end: Vector, ignored: Iterable[Actor] = ()
    ) -> bool:
        """Return True if nothing blocks the segment, or the hit lies at ``end``."""
        hit = self.line_trace(start, end, ignored)
        if hit is None:
            return True
        return all(abs(h - e) <= _LINE_OF_SIGHT_TOLERANCE for h, e in zip(hit, end))


def _dist_sq(a: Iterable[float], b: Iterable[float]) -> float:
    return sum((x - y) ** 2 for x, y in zip(a, b))


class EmotionSubsystem:
    """Tracks emotion components of a world and answers queries over them.

    Components are held weakly: one that is no longer referenced elsewhere drops out.
    """

    def __init__(
        self,
        world: Optional[World] = None,
        default_emotion_library: Optional[EmotionLibrary] = None,
    ) -> None:
        self.world = world
        self.default_emotion_library = default_emotion_library
        self._registered: list[weakref.ref] = []
        logger.info("EmotionSubsystem initialized")

    def deinitialize(self) -> None:
        """Forget every registered component and the default library."""
        self._registered.clear()
        self.default_emotion_library = None
        logger.info("EmotionSubsystem deinitialized")

    def _is_registered(self, component: Any) -> bool:
        return any(ref() is component for ref in self._registered)

    def register_emotion_component(self, component: Any) -> None:
        """Register a component unless it is already registered."""
        if component is None or self._is_registered(component):
            return
        self._registered.append(weakref.ref(component))
        logger.debug("Registered EmotionComponent for %s", component.owner_name)

    def unregister_emotion_component(self, component: Any) -> None:
        """Remove a component from the registry."""
        if component is None:
            return
        before = len(self._registered)
        self._registered = [ref for ref in self._registered if ref() is not component]
        if len(self._registered) < before:
            logger.debug("Unregistered EmotionComponent for %s", component.owner_name)

    def notify_emotion_changed(
        self, component: Any, emotion_tag: GameplayTag, intensity: float
    ) -> None:
        """Record that an emotion changed on ``component``."""
        if component is not None:
            logger.debug(
                "%s emotion changed: %s = %.2f", component.owner_name, emotion_tag, intensity
            )

    def _valid_components(self) -> list[Any]:
        return [c for c in (ref() for ref in self._registered) if c is not None]

    def _filter(self, predicate: Callable[[Any], bool]) -> list[Any]:
        return [c for c in self._valid_components() if predicate(c)]

    def get_all_emotion_components(self) -> list[Any]:
        """Return every live registered component, in registration order."""
        return self._valid_components()

    def find_components_with_emotion_tag(self, emotion_tag: GameplayTag) -> list[Any]:
        """Return components that have ``emotion_tag``."""
        return self._filter(lambda c: c.has_emotion_tag(emotion_tag))

    def find_components_with_any_emotion_tags(self, emotion_tags: TagContainer) -> list[Any]:
        """Return components having at least one of ``emotion_tags``."""
        return self._filter(lambda c: c.get_all_emotion_tags().has_any(emotion_tags))

    def find_components_with_all_emotion_tags(self, emotion_tags: TagContainer) -> list[Any]:
        """Return components having every one of ``emotion_tags``."""
        return self._filter(lambda c: c.get_all_emotion_tags().has_all(emotion_tags))

    def find_closest_component_with_emotion_tag(
        self, emotion_tag: GameplayTag, location: Vector, max_distance: float = 0.0
    ) -> Any:
        """Return the closest owned component with the tag; a positive ``max_distance`` limits it."""
        closest = None
        closest_sq = max_distance * max_distance if max_distance > 0.0 else math.inf
        for component in self.find_components_with_emotion_tag(emotion_tag):
            owner = component.owner
            if owner is None:
                continue
            distance_sq = _dist_sq(location, owner.location)
            if distance_sq < closest_sq:
                closest, closest_sq = component, distance_sq
        return closest

    def find_components_with_emotion_tag_in_radius(
        self, emotion_tag: GameplayTag, location: Vector, radius: float
    ) -> list[Any]:
        """Return owned components with the tag whose owner lies within ``radius``."""
        radius_sq = radius * radius
        return [
            c
            for c in self.find_components_with_emotion_tag(emotion_tag)
            if c.owner is not None and _dist_sq(location, c.owner.location) <= radius_sq
        ]

    def get_components_sorted_by_emotion_intensity(self, emotion_tag: GameplayTag) -> list[Any]:
        """Return components with the tag, highest intensity of it first."""
        return sorted(
            self.find_components_with_emotion_tag(emotion_tag),
            key=lambda c: c.get_emotion_intensity(emotion_tag),
            reverse=True,
        )

    def find_components_in_va_radius(self, va_coordinate: Vector2D, radius: float) -> list[Any]:
        """Return components whose VA coordinate lies within ``radius``."""
        radius_sq = radius * radius
        return self._filter(lambda c: _dist_sq(va_coordinate, c.va_coordinate) <= radius_sq)

    def find_closest_component_to_va_coordinate(self, va_coordinate: Vector2D) -> Any:
        """Return the component whose VA coordinate is closest, or None."""
        closest = None
        closest_sq = math.inf
        for component in self._valid_components():
            distance_sq = _dist_sq(va_coordinate, component.va_coordinate)
            if distance_sq < closest_sq:
                closest, closest_sq = component, distance_sq
        return closest

    def apply_emotional_influence_in_radius(
        self,
        influencer: Optional[Actor],
        emotion_tag: GameplayTag,
        intensity: float,
        location: Vector,
        radius: float,
        additive: bool = True,
    ) -> None:
        """Influence every other owned component in ``radius``, falling off linearly."""
        if influencer is None or intensity <= 0.0 or radius <= 0.0:
            return
        radius_sq = radius * radius
        for component in self._valid_components():
            owner = component.owner
            if owner is None or owner is influencer:
                continue
            distance_sq = _dist_sq(location, owner.location)
            if distance_sq <= radius_sq:
                ratio = 1.0 - min(max(math.sqrt(distance_sq) / radius, 0.0), 1.0)
                component.receive_emotional_influence(
                    influencer, emotion_tag, intensity * ratio, additive
                )

    def apply_emotional_influence_to_tag(
        self,
        influencer: Optional[Actor],
        target_tag: GameplayTag,
        emotion_tag: GameplayTag,
        intensity: float,
        additive: bool = True,
    ) -> None:
        """Influence every component having ``target_tag`` not owned by the influencer."""
        if influencer is None or intensity <= 0.0:
            return
        for component in self.find_components_with_emotion_tag(target_tag):
            if component.owner is not influencer:
                component.receive_emotional_influence(
                    influencer, emotion_tag, intensity, additive
                )

    def debug_log_all_emotions(self) -> list[str]:
        """Log a report of every registered component and return its lines."""
        lines = [
            "===== EmotionSubsystem Debug Log =====",
            f"Registered Components: {len(self._registered)}",
        ]
        for component in self._valid_components():
            valence, arousal = component.va_coordinate
            lines.append(f"- {component.owner_name}:")
            lines.append(f"  VA Coordinate: ({valence:.2f}, {arousal:.2f})")
            lines.append(f"  Influence Radius: {component.influence_radius:.2f}")
            lines.append("  Active Emotions:")
            for active in component.get_active_emotions():
                if active.emotion_data is not None:
                    lines.append(
                        f"    * {active.emotion_data.emotion.tag}: {active.intensity:.2f}"
                    )
            lines.append("  All Emotion Tags:")
            for tag in component.get_all_emotion_tags():
                lines.append(f"    * {tag}: {component.get_emotion_intensity(tag):.2f}")
        lines.append("======================================")
        for line in lines:
            logger.info(line)
        return lines