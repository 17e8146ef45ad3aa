import pytest

from emotionengine.tags import (
    GameplayTag,
    TagContainer,
    all_emotion_tags,
    tags_under,
)


JOY = GameplayTag("Emotion.Core.Joy")
FEAR = GameplayTag("Emotion.Core.Fear")
ECSTASY = GameplayTag("Emotion.Range.Ecstasy")


def test_empty_tag_is_invalid():
    assert GameplayTag().is_valid() is False
    assert JOY.is_valid() is True


@pytest.mark.parametrize("bad", ["Emotion..Joy", ".Emotion", "Emotion.", "Emotion. Joy"])
def test_malformed_names_rejected(bad):
    with pytest.raises(ValueError):
        GameplayTag(bad)


def test_non_string_name_rejected():
    with pytest.raises(TypeError):
        GameplayTag(5)


def test_matches_hierarchy():
    assert JOY.matches("Emotion.Core.Joy")
    assert JOY.matches("Emotion.Core")
    assert JOY.matches(GameplayTag("Emotion"))
    assert not JOY.matches("Emotion.Co")
    assert not GameplayTag("Emotion.Core").matches(JOY)
    assert not JOY.matches(GameplayTag())
    assert not GameplayTag().matches(JOY)


def test_str_is_name():
    assert str(JOY) == "Emotion.Core.Joy"


def test_add_tag_ignores_invalid_and_duplicates():
    container = TagContainer()
    container.add_tag(JOY)
    container.add_tag("Emotion.Core.Joy")
    container.add_tag(GameplayTag())
    assert len(container) == 1
    assert list(container) == [JOY]


def test_insertion_order_preserved():
    container = TagContainer([FEAR, JOY, ECSTASY])
    assert list(container) == [FEAR, JOY, ECSTASY]


def test_append_and_remove():
    container = TagContainer([JOY])
    container.append_tags(TagContainer([FEAR, JOY]))
    assert list(container) == [JOY, FEAR]
    assert container.remove_tag(JOY) is True
    assert container.remove_tag(JOY) is False
    assert list(container) == [FEAR]


def test_reset_empties():
    container = TagContainer([JOY, FEAR])
    assert container.is_empty() is False
    container.reset()
    assert container.is_empty() is True
    assert len(container) == 0


def test_has_tag_uses_parents_but_exact_does_not():
    container = TagContainer([JOY])
    assert container.has_tag("Emotion.Core")
    assert container.has_tag(JOY)
    assert not container.has_tag_exact("Emotion.Core")
    assert container.has_tag_exact(JOY)
    assert not container.has_tag(GameplayTag())
    assert "Emotion.Core" not in container
    assert JOY in container


def test_has_any_and_has_all():
    container = TagContainer([JOY, ECSTASY])
    assert container.has_any([FEAR, ECSTASY])
    assert not container.has_any([FEAR])
    assert container.has_all([JOY, "Emotion.Range"])
    assert not container.has_all([JOY, FEAR])


def test_empty_query_semantics():
    container = TagContainer([JOY])
    assert container.has_all(TagContainer()) is True
    assert container.has_any(TagContainer()) is False


def test_equality_ignores_order():
    assert TagContainer([JOY, FEAR]) == TagContainer([FEAR, JOY])
    assert not (TagContainer([JOY]) == TagContainer([FEAR]))


def test_copy_is_independent():
    original = TagContainer([JOY])
    copy = TagContainer(original)
    copy.add_tag(FEAR)
    assert list(original) == [JOY]
    assert len(copy) == 2


def test_bad_type_raises():
    with pytest.raises(TypeError):
        TagContainer().add_tag(3)


def test_all_emotion_tags_are_valid_and_unique():
    tags = all_emotion_tags()
    assert all(tag.is_valid() for tag in tags)
    assert len(set(tags)) == len(tags)
    assert all(tag.matches("Emotion") for tag in tags)
    assert JOY in tags


def test_core_tags():
    core = tags_under("Emotion.Core")
    assert len(core) == 8
    assert core[0] == JOY
    assert GameplayTag("Emotion.Core.Anticipation") in core


def test_tags_under_partitions_categories():
    categories = ["Emotion.Core", "Emotion.Range", "Emotion.Combined", "Emotion.Variation"]
    total = sum(len(tags_under(c)) for c in categories)
    assert total == len(all_emotion_tags())
    assert tags_under("Emotion") == all_emotion_tags()


def test_tags_under_exact_and_unknown():
    assert tags_under(JOY) == (JOY,)
    assert tags_under("Nothing.Here") == ()


def test_same_leaf_in_different_categories_is_distinct():
    remorse_tags = [t for t in all_emotion_tags() if t.name.endswith(".Remorse")]
    assert GameplayTag("Emotion.Range.Remorse") in remorse_tags
    assert GameplayTag("Emotion.Combined.Remorse") in remorse_tags
    assert len(set(remorse_tags)) == len(remorse_tags)