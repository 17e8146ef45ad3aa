"""Hierarchical gameplay tags, tag containers and the built-in emotion tag set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

TagLike = Union["GameplayTag", str]


@dataclass(frozen=True, order=True)
class GameplayTag:
    """A dot-separated hierarchical tag such as ``Emotion.Core.Joy``.

    The empty tag (``GameplayTag()``) is the invalid tag.
    """

    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"tag name must be a string, not {type(self.name).__name__}")
        if self.name and any(
            not part or part != part.strip() for part in self.name.split(".")
        ):
            raise ValueError(f"malformed tag name: {self.name!r}")

    def is_valid(self) -> bool:
        """Return True unless this is the empty tag."""
        return bool(self.name)

    def matches(self, other: TagLike) -> bool:
        """Return True if this tag equals ``other`` or lies beneath it."""
        other = _coerce(other)
        if not (self.is_valid() and other.is_valid()):
            return False
        return self.name == other.name or self.name.startswith(other.name + ".")

    def __str__(self) -> str:
        return self.name


def _coerce(tag: TagLike) -> GameplayTag:
    if isinstance(tag, GameplayTag):
        return tag
    if isinstance(tag, str):
        return GameplayTag(tag)
    raise TypeError(f"expected a GameplayTag or str, not {type(tag).__name__}")


class TagContainer:
    """An ordered set of valid gameplay tags with hierarchical queries."""

    __slots__ = ("_tags",)

    def __init__(self, tags: Iterable[TagLike] = ()) -> None:
        self._tags: dict[GameplayTag, None] = {}
        self.append_tags(tags)

    def add_tag(self, tag: TagLike) -> None:
        """Add a tag; invalid tags and duplicates are ignored."""
        tag = _coerce(tag)
        if tag.is_valid():
            self._tags.setdefault(tag, None)

    def append_tags(self, other: Iterable[TagLike]) -> None:
        """Add every tag of ``other``."""
        for tag in other:
            self.add_tag(tag)

    def remove_tag(self, tag: TagLike) -> bool:
        """Remove a tag; return whether it was present."""
        tag = _coerce(tag)
        if tag in self._tags:
            del self._tags[tag]
            return True
        return False

    def reset(self) -> None:
        """Remove all tags."""
        self._tags.clear()

    def has_tag(self, tag: TagLike) -> bool:
        """Return True if any held tag equals ``tag`` or is a child of it."""
        tag = _coerce(tag)
        return tag.is_valid() and any(held.matches(tag) for held in self._tags)

    def has_tag_exact(self, tag: TagLike) -> bool:
        """Return True only if ``tag`` itself is held."""
        tag = _coerce(tag)
        return tag.is_valid() and tag in self._tags

    def has_any(self, other: Iterable[TagLike]) -> bool:
        """Return True if any tag of ``other`` is matched; False for an empty ``other``."""
        return any(self.has_tag(tag) for tag in other)

    def has_all(self, other: Iterable[TagLike]) -> bool:
        """Return True if every tag of ``other`` is matched; True for an empty ``other``."""
        return all(self.has_tag(tag) for tag in other)

    def is_empty(self) -> bool:
        """Return True when no tags are held."""
        return not self._tags

    def __iter__(self) -> Iterator[GameplayTag]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        if not isinstance(tag, (GameplayTag, str)):
            return False
        return self.has_tag_exact(tag)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagContainer):
            return NotImplemented
        return set(self._tags) == set(other._tags)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = ", ".join(repr(tag.name) for tag in self._tags)
        return f"TagContainer([{names}])"


_EMOTION_TAG_NAMES: dict[str, tuple[str, ...]] = {
    "Emotion.Core": (
        "Joy", "Trust", "Fear", "Surprise", "Sadness", "Disgust", "Anger", "Anticipation",
    ),
    "Emotion.Range": (
        # Core intensities, high then low
        "Ecstasy", "Admiration", "Terror", "Amazement", "Grief", "Loathing", "Rage",
        "Vigilance",
        "Serenity", "Acceptance", "Apprehension", "Distraction", "Pensiveness", "Boredom",
        "Annoyance", "Interest",
        # Combined emotion ranges, high then low for each
        "Rapture", "Affection",
        "Remorse", "Compunction",
        "Glee", "Contentment",
        "Exuberance", "Hopefulness",
        "Ghastliness", "Somberness",
        "Servility", "Acquiescence",
        "Mawkishness", "Wishfulness",
        "Faith", "Optimistic",
        "Powerlust", "Authority",
        "Reverence", "Curiosity",
        "Worry", "Nervousness",
        "Dread", "Gloom",
        "SelfLoathing", "Embarassment",
        "Comdemnation", "Doubt",
        "Incredulity", "Dismissal",
        "Indignation", "Irritation",
        "Repentance", "Regret",
        "Spite", "Jealousy",
        "Resignation", "Discouragement",
        "Scorn", "Disdain",
        "Misanthropy", "Skepticism",
        "Ruthlessness", "Contention",
    ),
    "Emotion.Combined": (
        "Love", "Guilt", "Delight", "Optimism", "Morbidness", "Submission",
        "Sentimentality", "Hope", "Dominance", "Awe", "Anxiety", "Despair", "Shame",
        "Disapproval", "Unbelief", "Outrage", "Remorse", "Envy", "Pessimism", "Contempt",
        "Cynicism", "Aggressiveness",
    ),
    "Emotion.Variation": (
        # Joy
        "Joyful", "Interested", "Proud", "Accepted", "Powerful", "Peaceful", "Intimate",
        "Optimistic",
        "Amused", "Inquisitive", "Important", "Confidence", "Courageous", "Provocative",
        "Respected", "Fulfilled", "Hopeful", "Playful", "Sensitive", "Loving", "Inspired",
        "Open", "Ecstatic", "Liberated",
        # Surprise
        "Startled", "Confused", "Amazed", "Excited",
        "Shocked", "Dismayed", "Disillusioned", "Perplexed", "Astonished", "Awe", "Eager",
        "Energetic",
        # Trust
        "Secure", "Assured", "Confident", "Safe", "Supported",
        "Appreciated", "Valued", "Reliable", "Faithful", "Dependable", "Admired",
        "Included", "Protected", "Comforted", "Belonging",
        # Anticipation
        "Expectant", "Prepared", "Alert",
        "Restless", "Impatient", "Thrilled", "Fascinated", "Attentive", "Vigilant",
        # Fear
        "Scared", "Anxious", "Insecure", "Submissive", "Rejected", "Inadequate",
        "Worried", "Frightened",
        "Terrified", "Overwhelmed", "Inferior", "Worthless", "Insignificant", "Alienated",
        "Humiliated", "Wounded", "Embarrassed", "Ridiculed", "Disrespected",
        # Anger
        "Mad", "Irritated", "Frustrated", "Distant", "Critical", "Hostile", "Aggressive",
        "Provoked",
        "Enraged", "Hateful", "Threatened",
        # Disgust
        "Disappointed", "Awful", "Avoidance", "Hesitant", "Judgmental", "Revolted",
        "Skeptical", "Suspicious", "Withdrawn", "Aversion", "Repelled", "Repugnant",
        "Detestable", "Revulsion",
        # Sadness
        "Lonely", "Vulnerable", "Depressed", "Hurt", "Guilty", "Despair", "Bored", "Empty",
        "Isolated", "Abandoned", "Powerless", "Victimized", "Ashamed", "Remorseful",
        "Ignored", "Diminished", "Apathetic", "Indifferent",
    ),
}

_ALL_EMOTION_TAGS: tuple[GameplayTag, ...] = tuple(
    GameplayTag(f"{category}.{name}")
    for category, names in _EMOTION_TAG_NAMES.items()
    for name in names
)


def all_emotion_tags() -> tuple[GameplayTag, ...]:
    """Return every built-in emotion tag, in declaration order."""
    return _ALL_EMOTION_TAGS


def tags_under(prefix: TagLike) -> tuple[GameplayTag, ...]:
    """Return the built-in emotion tags equal to or beneath ``prefix``."""
    prefix = _coerce(prefix)
    return tuple(tag for tag in _ALL_EMOTION_TAGS if tag.matches(prefix))