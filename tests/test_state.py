import pytest

from emotionengine.emotion import Emotion, EmotionTriggerRange
from emotionengine.emotion_data import (
    CombinedEmotionMapping,
    CombineEmotionMapping,
    EmotionDefinition,
    EmotionLibrary,
)
from emotionengine.state import EmotionState
from emotionengine.tags import GameplayTag, TagContainer

JOY = GameplayTag("Emotion.Core.Joy")
SADNESS = GameplayTag("Emotion.Core.Sadness")
TRUST = GameplayTag("Emotion.Core.Trust")
LOVE = GameplayTag("Emotion.Combined.Love")
SERENITY = GameplayTag("Emotion.Range.Serenity")


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_library(with_combination=False):
    joy = EmotionDefinition(
        Emotion(
            tag=JOY,
            va_angle=0.0,
            va_magnitude=1.0,
            decay_rate=10.0,
            opposite_emotion_tag=SADNESS,
            range_emotion_tags=[EmotionTriggerRange(SERENITY, 0.0, 30.0)],
        )
    )
    sadness = EmotionDefinition(Emotion(tag=SADNESS, va_angle=180.0, va_magnitude=1.0))
    trust = EmotionDefinition(Emotion(tag=TRUST, va_angle=90.0, va_magnitude=1.0))
    love = EmotionDefinition(Emotion(tag=LOVE, va_angle=45.0, va_magnitude=1.0))
    library = EmotionLibrary(emotions=[joy, sadness, trust, love])
    if with_combination:
        library.combine_emotions.append(
            CombinedEmotionMapping(
                [CombineEmotionMapping(TagContainer([JOY, TRUST]), love)]
            )
        )
    return library


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def state(clock):
    return EmotionState(make_library(), clock=clock)


def test_add_emotion_creates_active_entry(state):
    state.add_emotion(JOY, 25.0)
    assert state.get_intensity(JOY) == pytest.approx(25.0)
    assert [a.emotion_data.emotion.tag for a in state.get_active_emotions()] == [JOY]


def test_add_emotion_accumulates(state):
    state.add_emotion(JOY, 30.0)
    state.add_emotion(JOY, 40.0)
    assert state.get_intensity(JOY) == pytest.approx(70.0)


def test_add_emotion_clamps_to_hundred(state):
    state.add_emotion(JOY, 150.0)
    assert state.get_intensity(JOY) == 100.0
    state.add_emotion(JOY, 10.0)
    assert state.get_intensity(JOY) == 100.0


def test_add_unknown_tag_is_ignored(state):
    state.add_emotion("Emotion.Core.Fear", 50.0)
    assert state.get_intensity("Emotion.Core.Fear") == 0.0
    assert state.get_active_emotions() == []


def test_without_library_nothing_is_added(clock):
    state = EmotionState(clock=clock)
    state.add_emotion(JOY, 50.0)
    state.set_intensity(JOY, 50.0)
    assert state.get_intensity(JOY) == 0.0


def test_set_intensity_zero_does_not_create(state):
    state.set_intensity(JOY, 0.0)
    assert JOY not in state.active_emotions


def test_set_intensity_keeps_existing_at_zero(state):
    state.set_intensity(JOY, 40.0)
    state.set_intensity(JOY, 0.0)
    assert JOY in state.active_emotions
    assert state.get_intensity(JOY) == 0.0


def test_remove_emotion(state):
    state.add_emotion(JOY, 20.0)
    state.remove_emotion(JOY)
    assert state.get_intensity(JOY) == 0.0
    assert not state.emotion_tags.has_tag(JOY)


def test_dominant_emotion(state):
    state.add_emotion(JOY, 20.0)
    state.add_emotion(SADNESS, 50.0)
    assert state.get_dominant_emotion() == (SADNESS, 50.0)


def test_dominant_emotion_when_empty(state):
    tag, intensity = state.get_dominant_emotion()
    assert not tag.is_valid()
    assert intensity == 0.0


def test_tags_include_triggered_range_tags(state):
    state.add_emotion(JOY, 10.0)
    assert state.emotion_tags.has_tag_exact(JOY)
    assert state.emotion_tags.has_tag_exact(SERENITY)


def test_tick_decays_intensity(state, clock):
    state.add_emotion(JOY, 50.0)
    clock.now = 1.0
    state.tick(1.0)
    assert 0.0 < state.get_intensity(JOY) < 50.0


def test_tick_removes_fully_decayed(state, clock):
    state.add_emotion(JOY, 5.0)
    clock.now = 1.0
    state.tick(1.0)
    assert JOY not in state.active_emotions
    assert state.emotion_tags.is_empty()


def test_va_moves_toward_emotion(state):
    state.add_emotion(JOY, 50.0)
    state.tick(0.1)
    x, y = state.va_coordinate
    assert 0.0 < x < 1.0
    assert y == pytest.approx(0.0)
    for _ in range(200):
        state.tick(0.1)
    assert state.va_coordinate[0] == pytest.approx(1.0)


def test_va_returns_to_neutral_without_emotions(state):
    state.va_coordinate = (0.5, 0.5)
    state.tick(0.5)
    x, y = state.va_coordinate
    assert 0.0 < x < 0.5 and 0.0 < y < 0.5


def test_combination_creates_result_with_min_intensity(clock):
    state = EmotionState(make_library(with_combination=True), clock=clock)
    state.add_emotion(JOY, 30.0)
    state.add_emotion(TRUST, 60.0)
    state.tick(0.0)
    assert state.get_intensity(LOVE) == pytest.approx(30.0)
    assert state.emotion_tags.has_tag(LOVE)


def test_handle_opposite_emotions_reduces_opposite(state):
    state.add_emotion(SADNESS, 40.0)
    state.handle_opposite_emotions(JOY, 20.0)
    assert state.get_intensity(SADNESS) == pytest.approx(30.0)
    state.handle_opposite_emotions(JOY, 100.0)
    assert SADNESS not in state.active_emotions


def test_find_emotions_in_radius_sorted(state):
    state.va_coordinate = (1.0, 0.0)
    found = state.find_emotions_in_radius(1.5)
    assert found[0].emotion.tag == JOY
    assert all(d.emotion.tag != SADNESS for d in found)


def test_initialize_resets(state):
    state.add_emotion(JOY, 20.0)
    state.va_coordinate = (0.3, 0.3)
    library = make_library()
    state.initialize(library)
    assert state.library is library
    assert state.get_active_emotions() == []
    assert state.va_coordinate == (0.0, 0.0)
    assert state.emotion_tags.is_empty()