"""Emotion records: intensity ranges, links to variations and the emotion itself."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from emotionengine.tags import GameplayTag, TagContainer


def _as_tag(value: GameplayTag | str) -> GameplayTag:
    return value if isinstance(value, GameplayTag) else GameplayTag(value)


class EmotionType(Enum):
    """Kind of emotion: a primary emotion or one made from combining others."""

    CORE = "Core"
    COMBINED = "Combined"


@dataclass
class EmotionTriggerRange:
    """A tag that is triggered while a value lies within ``[start, end]``."""

    emotion_tag_triggered: GameplayTag = field(default_factory=GameplayTag)
    start: float = 0.0
    end: float = 100.0

    def __post_init__(self) -> None:
        self.emotion_tag_triggered = _as_tag(self.emotion_tag_triggered)

    def is_in_range(self, value: float) -> bool:
        """Return True if ``value`` lies within the inclusive range."""
        return self.start <= value <= self.end

    def get_emotion_tag_triggered(self, value: float) -> GameplayTag:
        """Return the triggered tag for ``value``, or the empty tag."""
        return self.emotion_tag_triggered if self.is_in_range(value) else GameplayTag()


@dataclass
class EmotionLink:
    """Link from an emotion to variation tags, selected by the link's threshold."""

    link_emotion: GameplayTag = field(default_factory=GameplayTag)
    threshold: float = 0.0
    variation_emotion_tags: list[EmotionTriggerRange] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.link_emotion = _as_tag(self.link_emotion)

    def get_emotion_tag_triggered(self) -> GameplayTag:
        """Return the first variation tag whose range holds the threshold."""
        for trigger_range in self.variation_emotion_tags:
            if trigger_range.is_in_range(self.threshold):
                return trigger_range.emotion_tag_triggered
        return GameplayTag()


@dataclass
class Emotion:
    """A single emotion with its intensity and its place in valence-arousal space.

    The valence-arousal position is given in polar form: ``va_angle`` in degrees
    and ``va_magnitude``; ``va_coordinate`` gives it as (valence, arousal).
    """

    tag: GameplayTag = field(default_factory=GameplayTag)
    type: EmotionType = EmotionType.CORE
    intensity: float = 0.0
    va_angle: float = 0.0
    va_magnitude: float = 0.0
    decay_rate: float = 1.0
    influence_radius: float = 0.1
    opposite_emotion_tag: GameplayTag = field(default_factory=GameplayTag)
    range_emotion_tags: list[EmotionTriggerRange] = field(default_factory=list)
    link_emotions: list[EmotionLink] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tag = _as_tag(self.tag)
        self.opposite_emotion_tag = _as_tag(self.opposite_emotion_tag)

    @property
    def va_coordinate(self) -> tuple[float, float]:
        """The valence-arousal position as cartesian (valence, arousal)."""
        angle = math.radians(self.va_angle)
        return (self.va_magnitude * math.cos(angle), self.va_magnitude * math.sin(angle))

    def get_all_emotion_tags(self) -> TagContainer:
        """Return the main tag plus every range and link tag the intensity triggers."""
        tags = TagContainer()
        if self.tag.is_valid():
            tags.add_tag(self.tag)
        for range_emotion in self.range_emotion_tags:
            if range_emotion.is_in_range(self.intensity):
                tags.add_tag(range_emotion.emotion_tag_triggered)
        for link in self.link_emotions:
            if self.intensity >= link.threshold:
                triggered = link.get_emotion_tag_triggered()
                if triggered.is_valid():
                    tags.add_tag(triggered)
        return tags