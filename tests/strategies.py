"""
Shared Hypothesis Strategies

Generators for contract-valid timelines and their wire payloads.
"""

from hypothesis import strategies as st
from hypothesis.strategies import composite

from backend.contracts import PALETTE, Phase, Task, TimeUnit, Timeline

# Names survive validation unchanged (validator strips surrounding whitespace)
names = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
    min_size=1,
    max_size=24,
).map(str.strip).filter(bool)

color_keys = st.sampled_from(sorted(PALETTE) + ["Magenta", "DESIGN", "unknown-key"])


@composite
def tasks_within(draw, total):
    start = draw(st.integers(min_value=1, max_value=total))
    end = draw(st.integers(min_value=start, max_value=total))
    return Task(name=draw(names), start_index=start, end_index=end)


@composite
def phases_within(draw, total):
    color_key = draw(color_keys)
    return Phase(
        name=draw(names),
        color_key=color_key,
        display_color="#123456",
        tasks=tuple(draw(st.lists(tasks_within(total), min_size=1, max_size=4))),
    )


@composite
def timelines(draw, max_total=60):
    total = draw(st.integers(min_value=1, max_value=max_total))
    return Timeline(
        title=draw(names),
        unit=draw(st.sampled_from(list(TimeUnit))),
        total_intervals=total,
        phases=tuple(draw(st.lists(phases_within(total), min_size=1, max_size=4))),
    )


# Arbitrary JSON-like values for "never raises" properties
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=True) | st.text(max_size=10),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=12), children, max_size=5),
    max_leaves=20,
)
