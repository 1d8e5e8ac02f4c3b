"""Built-in hiragana reference templates.

Each entry gives the expected stroke count, the three shape flags
(horizontal line, vertical line, curve) and a complexity score in [0, 1].
The raw table is turned into frozen CharacterTemplate records once, at
import time, and exposed read-only as HIRAGANA_TEMPLATES.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..domain.recognition import CharacterTemplate, ShapeFeatures

# char: (stroke_count, horizontal, vertical, curve, complexity)
_RAW_TEMPLATES = {
    # a-row
    'あ': (3, True, True, True, 0.7),
    'い': (2, False, True, True, 0.4),
    'う': (2, True, False, True, 0.3),
    'え': (2, True, False, True, 0.4),
    'お': (3, True, True, True, 0.6),
    # ka-row
    'か': (3, True, True, False, 0.6),
    'き': (4, True, True, True, 0.8),
    'く': (1, False, False, True, 0.2),
    'け': (3, True, True, True, 0.7),
    'こ': (2, True, False, False, 0.3),
    # sa-row
    'さ': (3, True, False, True, 0.5),
    'し': (1, False, False, True, 0.3),
    'す': (2, False, False, True, 0.4),
    'せ': (3, True, False, True, 0.6),
    'そ': (1, False, False, True, 0.2),
    # ta-row
    'た': (4, True, True, False, 0.7),
    'ち': (2, False, True, True, 0.5),
    'つ': (1, False, False, True, 0.3),
    'て': (1, False, False, True, 0.2),
    'と': (2, False, True, True, 0.4),
    # na-row
    'な': (4, True, True, True, 0.8),
    'に': (3, True, True, False, 0.5),
    'ぬ': (2, False, False, True, 0.6),
    'ね': (2, False, False, True, 0.5),
    'の': (1, False, False, True, 0.2),
    # ha-row
    'は': (3, True, True, True, 0.7),
    'ひ': (1, False, True, False, 0.2),
    'ふ': (4, True, False, True, 0.8),
    'へ': (1, False, False, True, 0.1),
    'ほ': (4, True, True, True, 0.9),
    # ma-row
    'ま': (3, True, False, True, 0.6),
    'み': (2, False, False, True, 0.5),
    'む': (3, True, False, True, 0.7),
    'め': (2, False, False, True, 0.6),
    'も': (3, True, True, True, 0.7),
    # ya-row
    'や': (3, True, True, True, 0.6),
    'ゆ': (2, False, True, True, 0.5),
    'よ': (2, True, False, True, 0.4),
    # ra-row
    'ら': (2, False, False, True, 0.5),
    'り': (2, False, True, True, 0.4),
    'る': (1, False, False, True, 0.4),
    'れ': (1, False, False, True, 0.3),
    'ろ': (3, True, False, True, 0.6),
    # wa-row
    'わ': (3, True, False, True, 0.6),
    'を': (3, True, True, True, 0.7),
    'ん': (1, False, False, True, 0.2),
}


def build_registry(raw: Mapping[str, tuple]) -> Mapping[str, CharacterTemplate]:
    """Create an immutable character -> CharacterTemplate table.

    Args:
        raw: Mapping of character to (stroke_count, horizontal, vertical,
            curve, complexity) tuples.

    Returns:
        Read-only mapping of frozen templates.
    """
    table = {
        char: CharacterTemplate(strokes, ShapeFeatures(h, v, c), complexity)
        for char, (strokes, h, v, c, complexity) in raw.items()
    }
    return MappingProxyType(table)


HIRAGANA_TEMPLATES: Mapping[str, CharacterTemplate] = build_registry(_RAW_TEMPLATES)
