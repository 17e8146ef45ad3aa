"""Actors that act as emotional stimuli and push emotions onto other actors."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional

from emotionengine.component import EmotionComponent
from emotionengine.subsystem import Actor, Vector
from emotionengine.tags import GameplayTag, TagContainer


def _as_tag(tag: GameplayTag | str) -> GameplayTag:
    return tag if isinstance(tag, GameplayTag) else GameplayTag(tag)


def find_emotion_component(actor: Optional[Actor]) -> Optional[EmotionComponent]:
    """Return the emotion component attached to ``actor``, or None."""
    if actor is None:
        return None
    return actor.find_component(EmotionComponent)


@dataclass
class EmotionStimulusContext:
    """Describes why and from whom a stimulus comes, and how strongly it is scaled."""

    context_tags: TagContainer = field(default_factory=TagContainer)
    source_actor: Optional[Actor] = None
    context_intensity_modifier: float = 1.0


@dataclass(eq=False)
class EmotionInfluencer(Actor):
    """An actor that can trigger emotions in other actors.

    ``available_emotions`` limits what it may trigger; when empty, anything goes.
    """

    emotional_influence_strength: float = 1.0
    available_emotions: TagContainer = field(default_factory=TagContainer)
    stimulus_context: EmotionStimulusContext = field(default_factory=EmotionStimulusContext)

    def __post_init__(self) -> None:
        if not isinstance(self.available_emotions, TagContainer):
            self.available_emotions = TagContainer(self.available_emotions)
        if self.stimulus_context.source_actor is None:
            self.stimulus_context.source_actor = self

    def _may_trigger(self, tag: GameplayTag) -> bool:
        return self.available_emotions.is_empty() or self.available_emotions.has_tag(tag)

    def stimulus_source(self) -> Actor:
        """Return the actor credited as the source of this influencer's stimuli."""
        source = self.stimulus_context.source_actor
        return source if source is not None else self

    def set_stimulus_context(self, context: EmotionStimulusContext) -> None:
        """Adopt a copy of ``context``; without a source actor, this influencer is the source."""
        self.stimulus_context = replace(
            context,
            context_tags=TagContainer(context.context_tags),
            source_actor=context.source_actor if context.source_actor is not None else self,
        )

    @contextmanager
    def _temporary_context(self, context: EmotionStimulusContext) -> Iterator[None]:
        original = self.stimulus_context
        self.set_stimulus_context(context)
        try:
            yield
        finally:
            self.set_stimulus_context(original)

    def apply_emotion_to_target(
        self,
        target_actor: Optional[Actor],
        emotion_tag: GameplayTag | str,
        intensity: float,
        additive: bool = True,
    ) -> bool:
        """Apply an emotion, scaled by strength and context, to one actor."""
        tag = _as_tag(emotion_tag)
        if target_actor is None or not tag.is_valid():
            return False
        if not self._may_trigger(tag):
            return False
        component = find_emotion_component(target_actor)
        if component is None:
            return False
        modified = (
            intensity
            * self.emotional_influence_strength
            * self.stimulus_context.context_intensity_modifier
        )
        return component.receive_emotional_influence(
            self.stimulus_source(), tag, modified, additive
        )

    def apply_emotion_in_radius(
        self,
        origin: Vector,
        radius: float,
        emotion_tag: GameplayTag | str,
        intensity: float,
        additive: bool = True,
        requires_line_of_sight: bool = False,
    ) -> int:
        """Apply an emotion to every registered component within ``radius``, with linear falloff.

        Returns the number of actors affected.
        """
        tag = _as_tag(emotion_tag)
        if not tag.is_valid() or radius <= 0.0:
            return 0
        if not self._may_trigger(tag):
            return 0
        world = self.world
        if world is None or world.subsystem is None:
            return 0
        affected = 0
        for component in world.subsystem.get_all_emotion_components():
            target = component.owner
            if target is None:
                continue
            distance = math.dist(origin, target.location)
            if distance > radius:
                continue
            if requires_line_of_sight and not self._has_line_of_sight(origin, target.location):
                continue
            falloff = 1.0 - min(max(distance / radius, 0.0), 1.0)
            if self.apply_emotion_to_target(target, tag, intensity * falloff, additive):
                affected += 1
        return affected

    def apply_stimulus_to_target(
        self,
        target_actor: Optional[Actor],
        emotion_tag: GameplayTag | str,
        intensity: float,
        context: EmotionStimulusContext,
        additive: bool = True,
    ) -> bool:
        """Apply an emotion to one actor under ``context``, restoring the previous context."""
        tag = _as_tag(emotion_tag)
        if target_actor is None or not tag.is_valid():
            return False
        with self._temporary_context(context):
            return self.apply_emotion_to_target(target_actor, tag, intensity, additive)

    def apply_stimulus_in_radius(
        self,
        origin: Vector,
        radius: float,
        emotion_tag: GameplayTag | str,
        intensity: float,
        context: EmotionStimulusContext,
        additive: bool = True,
        requires_line_of_sight: bool = False,
    ) -> int:
        """Apply an emotion in a radius under ``context``, restoring the previous context."""
        tag = _as_tag(emotion_tag)
        if not tag.is_valid() or radius <= 0.0:
            return 0
        with self._temporary_context(context):
            return self.apply_emotion_in_radius(
                origin, radius, tag, intensity, additive, requires_line_of_sight
            )

    def apply_emotion_with_falloff(
        self,
        target_actor: Optional[Actor],
        emotion_tag: GameplayTag | str,
        intensity: float,
        max_distance: float,
    ) -> bool:
        """Additively apply an emotion scaled down with the target's distance from this actor."""
        tag = _as_tag(emotion_tag)
        if target_actor is None or not tag.is_valid() or max_distance <= 0.0:
            return False
        distance = self.distance_to(target_actor.location)
        if distance > max_distance:
            return False
        falloff = 1.0 - min(max(distance / max_distance, 0.0), 1.0)
        return self.apply_emotion_to_target(target_actor, tag, intensity * falloff, True)

    def trigger_all_emotions_in_radius(
        self, radius: float, intensity: float, additive: bool = True
    ) -> int:
        """Apply every available emotion around this actor; return the total affected."""
        if self.available_emotions.is_empty() or radius <= 0.0:
            return 0
        return sum(
            self.apply_emotion_in_radius(self.location, radius, tag, intensity, additive, False)
            for tag in self.available_emotions
        )

    def _has_line_of_sight(self, start: Vector, end: Vector) -> bool:
        if self.world is None:
            return False
        return self.world.has_line_of_sight(start, end, ignored=(self,))