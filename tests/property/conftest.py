# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Values stay inside what survives a trip through jq unchanged: integers
within the JavaScript-safe range (jq stores numbers as doubles), no
floats, and text without lone surrogates or control characters.
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

MAX_SAFE_INT = 2**53 - 1
MIN_SAFE_INT = -(2**53 - 1)

# Field names that the default paths address
RESERVED_KEYS = frozenset({"projectBinaryData", "projectData"})

json_text = st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=20)

json_primitives = (
    st.none()
    | st.booleans()
    | st.integers(min_value=MIN_SAFE_INT, max_value=MAX_SAFE_INT)
    | json_text
)

json_values: st.SearchStrategy[Any] = st.recursive(
    json_primitives,
    lambda children: st.lists(children, max_size=5) | st.dictionaries(json_text, children, max_size=5),
    max_leaves=20,
)

json_objects = st.dictionaries(json_text, json_values, max_size=6)

# Records that hold neither of the default recoded fields
plain_records = st.dictionaries(
    json_text.filter(lambda key: key not in RESERVED_KEYS),
    json_values,
    max_size=6,
)
