"""Resource extraction engine.

Turns the text of a JavaScript-like resource module into a LocaleMap using an
ordered cascade of strategies, from precise structural evaluation down to
textual pattern matching.

Python 3.13+. Depends on: babel.
"""

from .cascade import ExtractionOutcome, ExtractionResult, ResourceExtractor, extract
from .literal import evaluate_literal
from .sandbox import ModuleSandbox
from .strategies import DEFAULT_STRATEGIES, ExtractionOptions, Strategy

__all__ = [
    "DEFAULT_STRATEGIES",
    "ExtractionOptions",
    "ExtractionOutcome",
    "ExtractionResult",
    "ModuleSandbox",
    "ResourceExtractor",
    "Strategy",
    "evaluate_literal",
    "extract",
]
