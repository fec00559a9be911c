"""Hypothesis strategies for source lines that use locale keys.

Event-Emitting Strategies (HypoFuzz-Optimized):
- source_lines: Emits line_has_key=yes|no

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

# Keys used by the fragments; tests build their LocaleMap from a subset.
SOURCE_KEYS = ("l0001", "L0002", "l1024", "l99999")

_FRAGMENTS = (
    *SOURCE_KEYS,
    "R.", "R?.", "_t.R.", "R[", "]", "'", '"', "`",
    "$t(", "i18n.t(", "(", ")", "{{", "}}", "{", "}",
    " ", ":", "=", "==", ",", ";", ".",
    "l00", "x", "_", "$", "label", "<div :title=", "data-i18n=", ">",
)


@st.composite
def source_lines(draw: DrawFn) -> str:
    """Generate one line of code-like text mixing keys and key syntax.

    Events emitted:
    - line_has_key=yes|no
    """
    parts = draw(st.lists(st.sampled_from(_FRAGMENTS), max_size=16))
    line = "".join(parts)
    event(f"line_has_key={'yes' if any(k in line for k in SOURCE_KEYS) else 'no'}")
    return line
