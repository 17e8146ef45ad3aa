"""Emotion definitions, combination mappings and libraries of emotions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from emotionengine.emotion import Emotion, EmotionType
from emotionengine.tags import GameplayTag, TagContainer

Vector2D = tuple[float, float]
Color = tuple[float, float, float, float]


@dataclass(eq=False)
class EmotionDefinition:
    """A named emotion asset wrapping an :class:`Emotion`."""

    emotion: Emotion = field(
        default_factory=lambda: Emotion(
            intensity=0.0, decay_rate=1.0, influence_radius=0.1, type=EmotionType.CORE
        )
    )
    display_name: str = ""
    description: str = ""
    color: Color = (1.0, 1.0, 1.0, 1.0)
    icon: Optional[object] = None

    def get_all_emotion_tags(self) -> TagContainer:
        """Return the main tag plus the range and variation tags now triggered."""
        return self.emotion.get_all_emotion_tags()

    def update_intensity(self, delta_intensity: float) -> TagContainer:
        """Change intensity (kept within 0..100) and return newly triggered tags."""
        previous = self.get_all_emotion_tags()
        self.emotion.intensity = min(max(self.emotion.intensity + delta_intensity, 0.0), 100.0)
        return TagContainer(
            tag for tag in self.get_all_emotion_tags() if not previous.has_tag(tag)
        )

    def get_emotion_coordinate(self) -> Vector2D:
        """Return the emotion's cartesian valence-arousal coordinate."""
        return self.emotion.va_coordinate

    def apply_decay(self, delta_time: float) -> None:
        """Reduce intensity by ``decay_rate * delta_time``, never below zero."""
        if self.emotion.intensity > 0.0 and self.emotion.decay_rate > 0.0:
            amount = self.emotion.decay_rate * delta_time
            self.emotion.intensity = max(0.0, self.emotion.intensity - amount)

    def is_opposite_emotion(self, emotion_tag: GameplayTag) -> bool:
        """Return True if ``emotion_tag`` is this emotion's opposite."""
        opposite = self.emotion.opposite_emotion_tag
        return opposite.is_valid() and opposite == emotion_tag


@dataclass
class CombineEmotionMapping:
    """Trigger emotions that, present together, produce a result emotion."""

    trigger_emotions: TagContainer = field(default_factory=TagContainer)
    result_emotion: Optional[EmotionDefinition] = None


@dataclass
class EmotionalTendency:
    """Per-emotion coefficients expressing how personality scales input intensity."""

    emotion_tendencies: dict[GameplayTag, float] = field(default_factory=dict)
    display_name: str = ""
    description: str = ""


@dataclass
class CombinedEmotionMapping:
    """A set of emotion combinations and their results."""

    combined_emotions: list[CombineEmotionMapping] = field(default_factory=list)


def _sorted_by_distance(
    origin: Vector2D, definitions: list[EmotionDefinition]
) -> list[EmotionDefinition]:
    return sorted(definitions, key=lambda d: math.dist(origin, d.get_emotion_coordinate()))


@dataclass
class EmotionLibrary:
    """A collection of emotions and the relationships between them."""

    emotions: list[Optional[EmotionDefinition]] = field(default_factory=list)
    core_emotions: list[EmotionDefinition] = field(default_factory=list)
    combine_emotions: list[Optional[CombinedEmotionMapping]] = field(default_factory=list)
    emotional_tendency: Optional[EmotionalTendency] = None

    def get_emotion_by_tag(self, emotion_tag: GameplayTag) -> Optional[EmotionDefinition]:
        """Return the first emotion whose tag equals ``emotion_tag``, or None."""
        return next(
            (d for d in self.emotions if d is not None and d.emotion.tag == emotion_tag),
            None,
        )

    def get_opposite_emotions(self, emotion_tag: GameplayTag) -> list[EmotionDefinition]:
        """Return the opposite of the given emotion, if it is in the library."""
        source = self.get_emotion_by_tag(emotion_tag)
        if source is None or not source.emotion.opposite_emotion_tag.is_valid():
            return []
        opposite = self.get_emotion_by_tag(source.emotion.opposite_emotion_tag)
        return [opposite] if opposite is not None else []

    def get_adjacent_emotions(
        self, emotion_tag: GameplayTag, max_distance: float = 0.3
    ) -> list[EmotionDefinition]:
        """Return other emotions within ``max_distance`` in VA space, closest first."""
        source = self.get_emotion_by_tag(emotion_tag)
        if source is None:
            return []
        origin = source.get_emotion_coordinate()
        nearby = [
            d
            for d in self.emotions
            if d is not None
            and d is not source
            and math.dist(origin, d.get_emotion_coordinate()) <= max_distance
        ]
        return _sorted_by_distance(origin, nearby)

    def get_combined_emotion(
        self, emotion_tag1: GameplayTag, emotion_tag2: GameplayTag
    ) -> Optional[EmotionDefinition]:
        """Return the result of combining two emotions, or None."""
        pair = TagContainer([emotion_tag1, emotion_tag2])
        for mapping in self.combine_emotions:
            if mapping is None:
                continue
            for combination in mapping.combined_emotions:
                triggers = combination.trigger_emotions
                if pair.has_all(triggers) and len(pair) == len(triggers):
                    return combination.result_emotion
        return None

    def find_emotions_in_radius(
        self, va_coordinate: Vector2D, radius: float
    ) -> list[EmotionDefinition]:
        """Return emotions within ``radius`` of a VA coordinate, closest first."""
        inside = [
            d
            for d in self.emotions
            if d is not None and math.dist(va_coordinate, d.get_emotion_coordinate()) <= radius
        ]
        return _sorted_by_distance(va_coordinate, inside)