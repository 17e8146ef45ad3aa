"""Per-character emotional state: active emotions, decay, VA position and combinations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from emotionengine.emotion_data import EmotionDefinition, EmotionLibrary
from emotionengine.tags import GameplayTag, TagContainer

logger = logging.getLogger(__name__)

Vector2D = tuple[float, float]

FLT_MAX = 3.4028234663852886e38
_SMALL_NUMBER = 1e-8
_KINDA_SMALL_NUMBER = 1e-4
_NEUTRAL_RETURN_SPEED = 0.5


def _as_tag(tag: GameplayTag | str) -> GameplayTag:
    return tag if isinstance(tag, GameplayTag) else GameplayTag(tag)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _interp_to(current: Vector2D, target: Vector2D, delta_time: float, speed: float) -> Vector2D:
    """Move ``current`` toward ``target`` by a fraction ``delta_time * speed``."""
    if speed <= 0.0:
        return target
    dx, dy = target[0] - current[0], target[1] - current[1]
    if dx * dx + dy * dy < _KINDA_SMALL_NUMBER:
        return target
    alpha = _clamp(delta_time * speed, 0.0, 1.0)
    return (current[0] + dx * alpha, current[1] + dy * alpha)


@dataclass
class ActiveEmotion:
    """An emotion currently felt, with its intensity and the time it was last updated."""

    emotion_data: Optional[EmotionDefinition] = None
    intensity: float = 0.0
    last_update_time: float = 0.0


class EmotionState:
    """The set of active emotions of one character and the VA position they produce.

    ``clock`` returns the current time in seconds and drives decay.
    """

    def __init__(
        self,
        library: Optional[EmotionLibrary] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.library = library
        self.clock: Callable[[], float] = clock if clock is not None else time.monotonic
        self.emotion_tags = TagContainer()
        self.active_emotions: dict[GameplayTag, ActiveEmotion] = {}
        self.va_coordinate: Vector2D = (0.0, 0.0)
        self.influence_radius: float = 0.3

    def initialize(self, library: Optional[EmotionLibrary]) -> None:
        """Bind to ``library`` and clear all emotions, tags and the VA position."""
        self.library = library
        self.emotion_tags.reset()
        self.active_emotions.clear()
        self.va_coordinate = (0.0, 0.0)

    def tick(self, delta_time: float) -> None:
        """Advance the state: decay, move in VA space, combine, refresh tags."""
        self._apply_decay()
        self._update_va_coordinate(delta_time)
        self._process_emotion_combinations()
        self._update_emotion_tags()

    def get_intensity(self, tag: GameplayTag | str) -> float:
        """Return the intensity of the active emotion ``tag``, or 0."""
        active = self.active_emotions.get(_as_tag(tag))
        return active.intensity if active is not None else 0.0

    def _lookup(self, tag: GameplayTag, action: str) -> Optional[EmotionDefinition]:
        if self.library is None:
            logger.warning("EmotionState.%s - emotion library is not set", action)
            return None
        definition = self.library.get_emotion_by_tag(tag)
        if definition is None:
            logger.warning("EmotionState.%s - no emotion data for tag %s", action, tag)
        return definition

    def add_emotion(self, tag: GameplayTag | str, intensity: float) -> None:
        """Add ``intensity`` (kept within 0..100) to the emotion ``tag``."""
        tag = _as_tag(tag)
        definition = self._lookup(tag, "add_emotion")
        if definition is None:
            return
        amount = _clamp(intensity, 0.0, 100.0)
        now = self.clock()
        active = self.active_emotions.get(tag)
        if active is not None:
            active.intensity = _clamp(active.intensity + amount, 0.0, 100.0)
            active.last_update_time = now
        else:
            self.active_emotions[tag] = ActiveEmotion(definition, amount, now)
        self._update_emotion_tags()

    def remove_emotion(self, tag: GameplayTag | str) -> None:
        """Drop the emotion ``tag`` if it is active."""
        tag = _as_tag(tag)
        if tag in self.active_emotions:
            del self.active_emotions[tag]
            self._update_emotion_tags()

    def set_intensity(self, tag: GameplayTag | str, intensity: float) -> None:
        """Set the intensity (kept within 0..100) of ``tag``; a new emotion needs one above 0."""
        tag = _as_tag(tag)
        definition = self._lookup(tag, "set_intensity")
        if definition is None:
            return
        value = _clamp(intensity, 0.0, 100.0)
        now = self.clock()
        active = self.active_emotions.get(tag)
        if active is not None:
            active.intensity = value
            active.last_update_time = now
        elif value > 0.0:
            self.active_emotions[tag] = ActiveEmotion(definition, value, now)
        self._update_emotion_tags()

    def get_active_emotions(self) -> list[ActiveEmotion]:
        """Return the active emotions in the order they became active."""
        return list(self.active_emotions.values())

    def get_dominant_emotion(self) -> tuple[GameplayTag, float]:
        """Return the most intense emotion and its intensity, or the empty tag and 0."""
        best_tag, best_intensity = GameplayTag(), 0.0
        for tag, active in self.active_emotions.items():
            if active.intensity > best_intensity:
                best_tag, best_intensity = tag, active.intensity
        return best_tag, best_intensity

    def find_emotions_in_radius(self, radius: float) -> list[EmotionDefinition]:
        """Return library emotions within ``radius`` of the current VA position."""
        if self.library is None:
            return []
        return self.library.find_emotions_in_radius(self.va_coordinate, radius)

    def handle_opposite_emotions(self, tag: GameplayTag | str, intensity: float) -> None:
        """Reduce the opposite of ``tag`` by half of ``intensity``, dropping it at zero."""
        if self.library is None:
            return
        definition = self.library.get_emotion_by_tag(_as_tag(tag))
        if definition is None or not definition.emotion.opposite_emotion_tag.is_valid():
            return
        opposite_tag = definition.emotion.opposite_emotion_tag
        opposite = self.active_emotions.get(opposite_tag)
        if opposite is None:
            return
        opposite.intensity = max(0.0, opposite.intensity - intensity * 0.5)
        opposite.last_update_time = self.clock()
        if abs(opposite.intensity) <= _SMALL_NUMBER:
            del self.active_emotions[opposite_tag]

    def _update_va_coordinate(self, delta_time: float) -> None:
        if not self.active_emotions:
            x, y = self.va_coordinate
            if abs(x) > _KINDA_SMALL_NUMBER or abs(y) > _KINDA_SMALL_NUMBER:
                self.va_coordinate = _interp_to(
                    self.va_coordinate, (0.0, 0.0), delta_time, _NEUTRAL_RETURN_SPEED
                )
            return
        target_x = target_y = total = 0.0
        for active in self.active_emotions.values():
            if active.emotion_data is None:
                continue
            vx, vy = active.emotion_data.get_emotion_coordinate()
            target_x += vx * active.intensity
            target_y += vy * active.intensity
            total += active.intensity
        if total > 0.0:
            target = (_clamp(target_x / total, -1.0, 1.0), _clamp(target_y / total, -1.0, 1.0))
            speed = _clamp(total / 100.0, 0.1, 1.0) * 2.0
            self.va_coordinate = _interp_to(self.va_coordinate, target, delta_time, speed)

    def _apply_decay(self) -> None:
        now = self.clock()
        expired = []
        for tag, active in self.active_emotions.items():
            if active.emotion_data is None:
                continue
            elapsed = now - active.last_update_time
            decay = active.emotion_data.emotion.decay_rate * elapsed
            active.intensity = max(0.0, active.intensity - decay)
            active.last_update_time = now
            if abs(active.intensity) <= _SMALL_NUMBER:
                expired.append(tag)
        for tag in expired:
            del self.active_emotions[tag]

    def _update_emotion_tags(self) -> None:
        self.emotion_tags.reset()
        for tag, active in self.active_emotions.items():
            if active.emotion_data is not None:
                self.emotion_tags.add_tag(tag)
                self.emotion_tags.append_tags(active.emotion_data.get_all_emotion_tags())

    def _process_emotion_combinations(self) -> None:
        if self.library is None or not self.library.combine_emotions:
            return
        active_tags = TagContainer(self.active_emotions)
        for mapping in self.library.combine_emotions:
            if mapping is None:
                continue
            for combination in mapping.combined_emotions:
                if not active_tags.has_all(combination.trigger_emotions):
                    continue
                result = combination.result_emotion
                if result is None:
                    continue
                min_intensity = min(
                    (self.get_intensity(t) for t in combination.trigger_emotions),
                    default=FLT_MAX,
                )
                result_tag = result.emotion.tag
                if result_tag.is_valid() and min_intensity > self.get_intensity(result_tag):
                    self.active_emotions[result_tag] = ActiveEmotion(
                        result, min_intensity, self.clock()
                    )