# emotionengine

A small pure-Python library, with no dependencies, for giving simulated
characters emotions. Emotions are identified by hierarchical tags
(`Emotion.Core.Joy`, `Emotion.Range.Ecstasy`, ...) and carry an intensity
from 0 to 100. The intensity decays over time and pulls the character's
position in valence–arousal space. Emotions can combine into new ones. At set
intensities they also trigger range and variation tags. Influencers can spread
them between actors.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `emotionengine.tags`: `GameplayTag` (dot-separated, the empty tag is
  invalid, `matches()` for parent/child checks) and `TagContainer` (ordered
  set with `has_tag`, `has_tag_exact`, `has_any`, `has_all`). It also holds the
  built-in Plutchik tag set, through `all_emotion_tags()` and
  `tags_under(prefix)`.
- `emotionengine.emotion`: `Emotion`, `EmotionType`, `EmotionTriggerRange`
  and `EmotionLink`. An emotion's valence–arousal position is given as
  `va_angle` (degrees) and `va_magnitude`. `va_coordinate` returns it as
  `(valence, arousal)`. `get_all_emotion_tags()` returns the main tag plus the
  range and link tags that the current intensity triggers.
- `emotionengine.emotion_data`: `EmotionDefinition` and `EmotionLibrary`.
  The library looks up emotions by tag. It finds opposites, neighbours within a
  distance in valence–arousal space (closest first), emotions within a radius
  of a point, and the result of combining two emotions. Combinations are
  described by `CombinedEmotionMapping` and `CombineEmotionMapping`.
  `EmotionalTendency` holds per-emotion coefficients.
- `emotionengine.state`: `EmotionState` and `ActiveEmotion`. This is the live
  set of one character's emotions. `tick()` does four things:
  - applies decay, based on elapsed clock time;
  - moves the VA coordinate toward the intensity-weighted mean of the active
    emotions, or back toward neutral when none is active;
  - adds combined emotions;
  - refreshes the tags.
- `emotionengine.component`: `EmotionComponent`, attached to an `Actor`. It
  wraps an `EmotionState` and applies influences scaled by
  `emotional_susceptibility`. It honours `immune_emotions`,
  `blocked_influencers` and `allowed_influencers`. It calls the listeners in
  `on_emotion_changed`, `on_va_coordinate_changed` and
  `on_emotional_influence`.
- `emotionengine.subsystem`: `World`, `Actor` and `EmotionSubsystem`.
  - A `World` holds actors, a clock (`time_seconds`) and an optional
    `player_pawn`.
  - Line traces treat actors with a positive `blocking_radius` as spheres.
  - The subsystem holds registered components weakly. It answers queries by
    tag, by distance, by intensity and by VA coordinate, and can apply
    influences in a radius or to every component with a tag.
- `emotionengine.influencer`: `EmotionInfluencer` (an `Actor`) and
  `EmotionStimulusContext`. An influencer applies emotions to a single target
  or within a radius, with linear falloff. It can check line of sight and can
  apply a stimulus under a temporary context. `find_emotion_component(actor)`
  returns an actor's component.
- `emotionengine.functions`: free functions that work across a world:
  - `apply_emotion_with_falloff`, `apply_emotion_to_target` and
    `apply_emotional_stimulus_in_radius` apply emotions to actors;
  - `find_actors_with_emotion_in_radius`, `get_actor_dominant_emotion`,
    `actor_has_emotion_tag` and `get_actor_va_coordinate` query actors;
  - `has_line_of_sight` checks visibility between two points.

## Example

```python
from emotionengine.tags import GameplayTag
from emotionengine.emotion import Emotion
from emotionengine.emotion_data import EmotionDefinition, EmotionLibrary
from emotionengine.subsystem import Actor, World
from emotionengine.component import EmotionComponent
from emotionengine.influencer import EmotionInfluencer

joy = GameplayTag("Emotion.Core.Joy")
library = EmotionLibrary(emotions=[EmotionDefinition(emotion=Emotion(tag=joy))])

world = World(default_emotion_library=library)
npc = world.spawn(Actor("npc", location=(100.0, 0.0, 0.0)))
component = npc.add_component(EmotionComponent())
component.begin_play()                         # registers with world.subsystem

component.add_emotion(joy, 40.0)
print(component.get_emotion_intensity(joy))    # 40.0
print(component.get_dominant_emotion())        # (GameplayTag(name='Emotion.Core.Joy'), 40.0)

# Decay follows the world clock: advance it, then tick.
world.time_seconds += 5.0
component.tick(1.0)
print(component.get_emotion_intensity(joy))    # 35.0 (decay_rate 1.0 per second)

bard = world.spawn(EmotionInfluencer(name="bard", emotional_influence_strength=2.0))
bard.apply_emotion_to_target(npc, joy, 10.0)   # additive: 35 + 10 * 2
print(component.get_emotion_intensity(joy))    # 55.0
```

Emotion lookups need a library. A component uses its own `emotion_library` or
else the world subsystem's `default_emotion_library`. Without either, adding
an emotion logs a warning and does nothing.

## What it does not do

- It is a library only. There is no command-line program, no rendering and no
  game loop. You call `tick()` and advance `World.time_seconds` yourself.
- Emotion libraries are built in code. Nothing loads them from or saves them
  to files.
- `EmotionalTendency` is only stored. No intensity is scaled by it.
- `EmotionState.handle_opposite_emotions` can be called directly, but adding
  or setting an emotion does not reduce its opposite.
- `EmotionSubsystem.debug_log_all_emotions` produces a text report. There is
  no graphical view of VA coordinates.