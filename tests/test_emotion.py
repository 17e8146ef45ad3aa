import pytest

from emotionengine.emotion import Emotion, EmotionLink, EmotionTriggerRange, EmotionType
from emotionengine.tags import GameplayTag

JOY = GameplayTag("Emotion.Core.Joy")
ECSTASY = GameplayTag("Emotion.Range.Ecstasy")
SERENITY = GameplayTag("Emotion.Range.Serenity")
JOYFUL = GameplayTag("Emotion.Variation.Joyful")
PROUD = GameplayTag("Emotion.Variation.Proud")


def test_trigger_range_is_inclusive():
    rng = EmotionTriggerRange(ECSTASY, start=20.0, end=40.0)
    assert rng.is_in_range(20.0)
    assert rng.is_in_range(40.0)
    assert not rng.is_in_range(19.9)
    assert not rng.is_in_range(40.1)


def test_trigger_range_tag_in_and_out_of_range():
    rng = EmotionTriggerRange(ECSTASY, start=20.0, end=40.0)
    assert rng.get_emotion_tag_triggered(30.0) == ECSTASY
    assert not rng.get_emotion_tag_triggered(50.0).is_valid()


def test_trigger_range_accepts_string_tag():
    rng = EmotionTriggerRange("Emotion.Range.Ecstasy")
    assert rng.emotion_tag_triggered == ECSTASY


def test_link_selects_variation_by_threshold():
    link = EmotionLink(
        link_emotion=JOY,
        threshold=50.0,
        variation_emotion_tags=[
            EmotionTriggerRange(PROUD, 0.0, 30.0),
            EmotionTriggerRange(JOYFUL, 40.0, 60.0),
        ],
    )
    assert link.get_emotion_tag_triggered() == JOYFUL


def test_link_without_matching_range_gives_empty_tag():
    link = EmotionLink(JOY, 90.0, [EmotionTriggerRange(PROUD, 0.0, 30.0)])
    assert link.get_emotion_tag_triggered() == GameplayTag()


def _joy(intensity):
    return Emotion(
        tag=JOY,
        intensity=intensity,
        range_emotion_tags=[
            EmotionTriggerRange(ECSTASY, 70.0, 100.0),
            EmotionTriggerRange(SERENITY, 0.0, 30.0),
        ],
        link_emotions=[EmotionLink(JOY, 50.0, [EmotionTriggerRange(JOYFUL, 40.0, 60.0)])],
    )


def test_all_tags_at_high_intensity():
    tags = _joy(80.0).get_all_emotion_tags()
    assert set(tags) == {JOY, ECSTASY, JOYFUL}


def test_all_tags_at_low_intensity():
    tags = _joy(10.0).get_all_emotion_tags()
    assert set(tags) == {JOY, SERENITY}


def test_invalid_main_tag_is_not_added():
    emotion = Emotion(range_emotion_tags=[EmotionTriggerRange(SERENITY, 0.0, 30.0)])
    assert set(emotion.get_all_emotion_tags()) == {SERENITY}


def test_defaults():
    emotion = Emotion()
    assert emotion.type is EmotionType.CORE
    assert emotion.decay_rate == 1.0
    assert emotion.influence_radius == 0.1
    assert not emotion.opposite_emotion_tag.is_valid()


def test_va_coordinate_along_valence_axis():
    emotion = Emotion(va_angle=0.0, va_magnitude=0.5)
    assert emotion.va_coordinate == pytest.approx((0.5, 0.0))


def test_va_coordinate_along_arousal_axis():
    emotion = Emotion(va_angle=90.0, va_magnitude=0.5)
    assert emotion.va_coordinate == pytest.approx((0.0, 0.5), abs=1e-12)