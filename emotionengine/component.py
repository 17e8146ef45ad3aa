"""The emotion component attached to actors that feel emotions."""

from __future__ import annotations

from typing import Any, Callable, Optional

from emotionengine.emotion_data import EmotionDefinition, EmotionLibrary
from emotionengine.state import ActiveEmotion, EmotionState
from emotionengine.subsystem import Actor, EmotionSubsystem
from emotionengine.tags import GameplayTag, TagContainer

Vector2D = tuple[float, float]

_SMALL_NUMBER = 1e-8
_VA_CHANGE_TOLERANCE = 0.01


def _as_tag(tag: GameplayTag | str) -> GameplayTag:
    return tag if isinstance(tag, GameplayTag) else GameplayTag(tag)


def _va_equal(a: Vector2D, b: Vector2D) -> bool:
    return abs(a[0] - b[0]) <= _VA_CHANGE_TOLERANCE and abs(a[1] - b[1]) <= _VA_CHANGE_TOLERANCE


class EmotionComponent:
    """Holds an actor's emotional state and reacts to influences from other actors.

    Listeners are plain callables appended to ``on_emotion_changed`` (tag, intensity),
    ``on_va_coordinate_changed`` (coordinate) and ``on_emotional_influence``
    (influencer, tag, intensity).
    """

    def __init__(self, emotion_library: Optional[EmotionLibrary] = None) -> None:
        self.owner: Optional[Actor] = None
        self.emotion_library = emotion_library
        self.state = EmotionState(clock=self._now)
        self._susceptibility = 1.0
        self.spring_stiffness = 2.0
        self.damping_factor = 0.5
        self.immune_emotions = TagContainer()
        self.blocked_influencers: list[type] = []
        self.allowed_influencers: list[type] = []
        self.on_emotion_changed: list[Callable[[GameplayTag, float], Any]] = []
        self.on_va_coordinate_changed: list[Callable[[Vector2D], Any]] = []
        self.on_emotional_influence: list[Callable[[Any, GameplayTag, float], Any]] = []

    def _now(self) -> float:
        world = self.owner.world if self.owner is not None else None
        return world.time_seconds if world is not None else 0.0

    def _subsystem(self) -> Optional[EmotionSubsystem]:
        world = self.owner.world if self.owner is not None else None
        return world.subsystem if world is not None else None

    def _ensure_state(self) -> None:
        library = self.emotion_library
        if library is None:
            subsystem = self._subsystem()
            library = subsystem.default_emotion_library if subsystem is not None else None
        if library is not None and self.state.library is not library:
            self.state.initialize(library)

    @property
    def owner_name(self) -> str:
        """The owning actor's name, or ``"Unknown"``."""
        return self.owner.name if self.owner is not None else "Unknown"

    @property
    def emotional_susceptibility(self) -> float:
        """Multiplier applied to received influences; never negative."""
        return self._susceptibility

    @emotional_susceptibility.setter
    def emotional_susceptibility(self, value: float) -> None:
        self._susceptibility = max(0.0, value)

    @property
    def va_coordinate(self) -> Vector2D:
        """The current valence-arousal position."""
        return self.state.va_coordinate

    @va_coordinate.setter
    def va_coordinate(self, value: Vector2D) -> None:
        self._ensure_state()
        previous = self.state.va_coordinate
        self.state.va_coordinate = value
        if not _va_equal(previous, value):
            self._broadcast_va_changed(value)

    @property
    def influence_radius(self) -> float:
        """The radius of influence in VA space; never negative."""
        return self.state.influence_radius

    @influence_radius.setter
    def influence_radius(self, value: float) -> None:
        self._ensure_state()
        self.state.influence_radius = max(0.0, value)

    def begin_play(self) -> None:
        """Prepare the state and register with the world's emotion subsystem."""
        self._ensure_state()
        subsystem = self._subsystem()
        if subsystem is not None:
            subsystem.register_emotion_component(self)

    def tick(self, delta_time: float) -> None:
        """Advance the emotional state, announcing a significant VA change."""
        previous = self.state.va_coordinate
        self.state.tick(delta_time)
        if not _va_equal(previous, self.state.va_coordinate):
            self._broadcast_va_changed(self.state.va_coordinate)

    def end_play(self) -> None:
        """Unregister from the world's emotion subsystem."""
        subsystem = self._subsystem()
        if subsystem is not None:
            subsystem.unregister_emotion_component(self)

    def add_emotion(self, emotion_tag: GameplayTag | str, intensity: float) -> None:
        """Add intensity to an emotion, announcing a change."""
        tag = _as_tag(emotion_tag)
        self._ensure_state()
        previous = self.state.get_intensity(tag)
        self.state.add_emotion(tag, intensity)
        current = self.state.get_intensity(tag)
        if abs(previous - current) > _SMALL_NUMBER:
            self._broadcast_emotion_changed(tag, current)

    def remove_emotion(self, emotion_tag: GameplayTag | str) -> None:
        """Remove an emotion, announcing it at intensity 0 if it was felt."""
        tag = _as_tag(emotion_tag)
        self._ensure_state()
        was_felt = self.state.get_intensity(tag) > 0.0
        self.state.remove_emotion(tag)
        if was_felt:
            self._broadcast_emotion_changed(tag, 0.0)

    def set_emotion_intensity(self, emotion_tag: GameplayTag | str, intensity: float) -> None:
        """Set an emotion's intensity, announcing a change."""
        tag = _as_tag(emotion_tag)
        self._ensure_state()
        previous = self.state.get_intensity(tag)
        self.state.set_intensity(tag, intensity)
        current = self.state.get_intensity(tag)
        if abs(previous - current) > _SMALL_NUMBER:
            self._broadcast_emotion_changed(tag, current)

    def get_emotion_intensity(self, emotion_tag: GameplayTag | str) -> float:
        """Return the intensity of an emotion, or 0."""
        return self.state.get_intensity(emotion_tag)

    def has_emotion_tag(self, emotion_tag: GameplayTag | str) -> bool:
        """Return True if the state's tags match ``emotion_tag``."""
        return self.state.emotion_tags.has_tag(emotion_tag)

    def get_all_emotion_tags(self) -> TagContainer:
        """Return a copy of every emotion tag currently held."""
        return TagContainer(self.state.emotion_tags)

    def get_active_emotions(self) -> list[ActiveEmotion]:
        """Return the active emotions."""
        return self.state.get_active_emotions()

    def get_dominant_emotion(self) -> tuple[GameplayTag, float]:
        """Return the most intense emotion and its intensity."""
        return self.state.get_dominant_emotion()

    def find_emotions_in_radius(self, radius: float) -> list[EmotionDefinition]:
        """Return library emotions near the current VA position, closest first."""
        return self.state.find_emotions_in_radius(radius)

    def receive_emotional_influence(
        self,
        influencer: Any,
        emotion_tag: GameplayTag | str,
        intensity: float,
        additive: bool = True,
    ) -> bool:
        """Apply an influence scaled by susceptibility; return whether it was accepted."""
        tag = _as_tag(emotion_tag)
        if influencer is None or not tag.is_valid():
            return False
        if not self.can_receive_influence_from(influencer):
            return False
        if self.immune_emotions.has_tag(tag):
            return False
        modified = intensity * self._susceptibility
        if additive:
            self.set_emotion_intensity(tag, self.get_emotion_intensity(tag) + modified)
        else:
            self.set_emotion_intensity(tag, modified)
        for listener in list(self.on_emotional_influence):
            listener(influencer, tag, modified)
        return True

    def apply_emotional_stimulus(self, emotion_tag: GameplayTag | str, intensity: float) -> None:
        """Add an emotion directly, bypassing influence checks."""
        self.add_emotion(emotion_tag, intensity)

    def can_receive_influence_from(self, influencer: Any) -> bool:
        """Return True unless the influencer is blocked or not among the allowed kinds."""
        if influencer is None:
            return False
        if any(isinstance(influencer, kind) for kind in self.blocked_influencers if kind):
            return False
        if not self.allowed_influencers:
            return True
        return any(isinstance(influencer, kind) for kind in self.allowed_influencers if kind)

    def _broadcast_emotion_changed(self, tag: GameplayTag, intensity: float) -> None:
        for listener in list(self.on_emotion_changed):
            listener(tag, intensity)
        subsystem = self._subsystem()
        if subsystem is not None:
            subsystem.notify_emotion_changed(self, tag, intensity)

    def _broadcast_va_changed(self, coordinate: Vector2D) -> None:
        for listener in list(self.on_va_coordinate_changed):
            listener(coordinate)