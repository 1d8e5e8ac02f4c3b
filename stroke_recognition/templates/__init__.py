"""Character templates and the template store.

This module provides the built-in hiragana reference templates and the
cache that serves them to the recognition service.

The module exports:
    HIRAGANA_TEMPLATES: Read-only mapping of character -> CharacterTemplate.
    build_registry: Build such a mapping from raw tuples.
    TemplateStore: Lazy, deduplicating, bounded template cache.

Example usage:
    Using the store::

        from stroke_recognition.templates import TemplateStore

        store = TemplateStore()
        template = await store.get('く')
        print(template.stroke_count)  # 1

        store.supported_characters()[:3]
        store.characters_by_complexity()['simple']
"""

from .registry import HIRAGANA_TEMPLATES, build_registry
from .repository import TemplateStore

__all__ = ['HIRAGANA_TEMPLATES', 'build_registry', 'TemplateStore']
