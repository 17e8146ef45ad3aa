"""Emotion simulation for game characters: tagged emotions, valence-arousal space and influence."""

__version__ = "0.1.0"

__all__ = [
    "tags",
    "emotion",
    "emotion_data",
    "subsystem",
    "state",
    "component",
    "influencer",
    "functions",
]