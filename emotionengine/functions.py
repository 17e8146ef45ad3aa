"""Free functions for applying and querying emotions across actors of a world."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from emotionengine.influencer import EmotionInfluencer, find_emotion_component
from emotionengine.subsystem import Actor, Vector, Vector2D, World
from emotionengine.tags import GameplayTag

_TARGET_HIT_TOLERANCE = 50.0


def _as_tag(tag: GameplayTag | str | None) -> GameplayTag:
    if tag is None:
        return GameplayTag()
    return tag if isinstance(tag, GameplayTag) else GameplayTag(tag)


def _influence_strength(influencer: Actor) -> float:
    if isinstance(influencer, EmotionInfluencer):
        return influencer.emotional_influence_strength
    return 1.0


def has_line_of_sight(world: Optional[World], start: Vector, end: Vector) -> bool:
    """Return True if a trace from ``start`` reaches ``end`` or hits something near it.

    The world's player pawn is ignored by the trace.
    """
    if world is None:
        return False
    hit = world.line_trace(start, end, ignored=(world.player_pawn,))
    if hit is None:
        return True
    return math.dist(hit, end) < _TARGET_HIT_TOLERANCE


def apply_emotion_with_falloff(
    influencer: Optional[Actor],
    origin: Vector,
    targets: Iterable[Optional[Actor]],
    emotion_tag: GameplayTag | str,
    base_intensity: float,
    inner_radius: float,
    outer_radius: float,
    additive: bool = True,
    requires_line_of_sight: bool = False,
) -> int:
    """Apply an emotion to ``targets``: full strength inside ``inner_radius``, fading to
    nothing at ``outer_radius``. Returns the number of targets affected."""
    tag = _as_tag(emotion_tag)
    targets = list(targets)
    if influencer is None or not tag.is_valid() or not targets or outer_radius <= 0.0:
        return 0
    inner_radius = min(inner_radius, outer_radius)
    strength = _influence_strength(influencer)
    world = influencer.world
    affected = 0
    for target in targets:
        if target is None or target is influencer:
            continue
        component = find_emotion_component(target)
        if component is None or not component.can_receive_influence_from(influencer):
            continue
        distance = math.dist(origin, target.location)
        if distance > outer_radius:
            continue
        if requires_line_of_sight and not has_line_of_sight(world, origin, target.location):
            continue
        intensity = base_intensity * strength
        if distance > inner_radius:
            span = outer_radius - inner_radius
            intensity *= 1.0 - min(max((distance - inner_radius) / span, 0.0), 1.0)
        if component.receive_emotional_influence(influencer, tag, intensity, additive):
            affected += 1
    return affected


def apply_emotion_to_target(
    influencer: Optional[Actor],
    target_actor: Optional[Actor],
    emotion_tag: GameplayTag | str,
    intensity: float,
    additive: bool = True,
) -> bool:
    """Apply an emotion, scaled by the influencer's strength, to one actor."""
    tag = _as_tag(emotion_tag)
    if influencer is None or target_actor is None or not tag.is_valid():
        return False
    component = find_emotion_component(target_actor)
    if component is None:
        return False
    return component.receive_emotional_influence(
        influencer, tag, intensity * _influence_strength(influencer), additive
    )


def get_actor_dominant_emotion(actor: Optional[Actor]) -> Optional[tuple[GameplayTag, float]]:
    """Return the actor's most intense emotion and its intensity, or None."""
    component = find_emotion_component(actor)
    if component is None:
        return None
    tag, intensity = component.get_dominant_emotion()
    return (tag, intensity) if tag.is_valid() else None


def actor_has_emotion_tag(actor: Optional[Actor], emotion_tag: GameplayTag | str) -> bool:
    """Return True if the actor's emotion component has ``emotion_tag``."""
    tag = _as_tag(emotion_tag)
    if not tag.is_valid():
        return False
    component = find_emotion_component(actor)
    return component is not None and component.has_emotion_tag(tag)


def get_actor_va_coordinate(actor: Optional[Actor]) -> Vector2D:
    """Return the actor's valence-arousal position, or the origin."""
    component = find_emotion_component(actor)
    return component.va_coordinate if component is not None else (0.0, 0.0)


def find_actors_with_emotion_in_radius(
    world: Optional[World],
    origin: Vector,
    radius: float,
    emotion_tag: GameplayTag | str | None = None,
    min_intensity: float = 0.0,
) -> list[Actor]:
    """Return actors with emotion components within ``radius``.

    With a valid ``emotion_tag``, only those feeling it at ``min_intensity`` or more.
    """
    if world is None or radius <= 0.0:
        return []
    tag = _as_tag(emotion_tag)
    found = []
    for actor in world.actors:
        component = find_emotion_component(actor)
        if component is None or math.dist(origin, actor.location) > radius:
            continue
        if tag.is_valid() and component.get_emotion_intensity(tag) < min_intensity:
            continue
        found.append(actor)
    return found


def apply_emotional_stimulus_in_radius(
    world: Optional[World],
    influencer: Optional[Actor],
    origin: Vector,
    radius: float,
    emotion_tag: GameplayTag | str,
    intensity: float,
    requires_line_of_sight: bool = False,
) -> int:
    """Additively apply an emotion to every other actor within ``radius``, fading outward."""
    tag = _as_tag(emotion_tag)
    if world is None or influencer is None or not tag.is_valid() or radius <= 0.0:
        return 0
    targets = [
        actor
        for actor in world.actors
        if actor is not influencer
        and find_emotion_component(actor) is not None
        and math.dist(origin, actor.location) <= radius
    ]
    return apply_emotion_with_falloff(
        influencer, origin, targets, tag, intensity, 0.0, radius, True, requires_line_of_sight
    )