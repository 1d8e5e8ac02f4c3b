"""Template store with lazy, deduplicated loading.

This module provides the TemplateStore class, the only shared mutable
resource of the recognition engine. It keeps a small set of basic
characters resident and loads every other template on first request.

The store provides:
    - Eager preloading of the protected basic characters
    - Lazy asynchronous loading that yields to the event loop
    - Request deduplication: concurrent lookups for the same uncached
      character share one in-flight load
    - Bounded eviction that never removes the basic characters
    - Catalogue queries over the full registry

Example usage:
    Looking up templates::

        import asyncio
        from stroke_recognition.templates import TemplateStore

        store = TemplateStore()

        async def main():
            a, ka = await asyncio.gather(store.get('あ'), store.get('か'))
            print(a.stroke_count, ka.stroke_count)

        asyncio.run(main())

    Keeping the cache small::

        store.cleanup(max_cache_size=10)
        print(store.memory_usage())
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from ..config import BASIC_CHARACTERS, DEFAULT_MAX_CACHE_SIZE
from ..domain.recognition import CharacterTemplate
from .registry import HIRAGANA_TEMPLATES

_logger = logging.getLogger(__name__)


class TemplateStore:
    """Cache of character templates backed by an immutable registry.

    Lookups never fail: characters missing from the registry resolve to
    CharacterTemplate.fallback().

    Attributes:
        load_count: Number of load operations performed since creation
            (preloading excluded). Useful for checking deduplication.
        load_timeout: Optional timeout in seconds for a single load. When
            it expires the fallback template is returned.

    Example:
        >>> store = TemplateStore()
        >>> store.is_loaded('あ')
        True
        >>> store.is_loaded('か')
        False
    """

    def __init__(self, registry: Mapping[str, CharacterTemplate] = HIRAGANA_TEMPLATES,
                 basic_characters: Iterable[str] = BASIC_CHARACTERS,
                 load_timeout: Optional[float] = None):
        """Initialize the store and preload the basic characters.

        Args:
            registry: Character -> template table to load from.
            basic_characters: Characters kept resident and never evicted.
            load_timeout: Optional per-load timeout in seconds.
        """
        self._registry = registry
        self._basic = tuple(basic_characters)
        self._cache: Dict[str, CharacterTemplate] = {}
        self._pending: Dict[str, asyncio.Future] = {}
        self.load_timeout = load_timeout
        self.load_count = 0
        self._preload_basic()

    def _preload_basic(self) -> None:
        for char in self._basic:
            template = self._registry.get(char)
            if template is not None:
                self._cache[char] = template
        _logger.debug("Preloaded %d basic templates", len(self._cache))

    @property
    def basic_characters(self) -> tuple:
        return self._basic

    async def get(self, character: str) -> CharacterTemplate:
        """Return the template for a character, loading it if needed.

        Concurrent calls for the same uncached character await a single
        shared load.

        Args:
            character: Character to look up.

        Returns:
            The registered template, or the fallback template when the
            character is unknown or the load fails, times out or is
            cancelled. Fallbacks from a failed, timed-out or cancelled load
            are not cached, so the next request retries.
        """
        cached = self._cache.get(character)
        if cached is not None:
            return cached

        pending = self._pending.get(character)
        if pending is not None:
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._pending[character] = future
        try:
            template = await self._load_with_timeout(character)
        except asyncio.CancelledError:
            # Only the owner was cancelled; callers sharing the load still get an answer
            if not future.done():
                future.set_result(CharacterTemplate.fallback())
            raise
        except asyncio.TimeoutError:
            _logger.warning("Template load for %r timed out after %ss, using fallback",
                            character, self.load_timeout)
            template = CharacterTemplate.fallback()
        except Exception as e:
            _logger.error("Unexpected error loading template for %r: %s",
                          character, e, exc_info=True)
            template = CharacterTemplate.fallback()
        else:
            self._cache[character] = template
        finally:
            if self._pending.get(character) is future:
                del self._pending[character]

        future.set_result(template)
        return template

    async def _load_with_timeout(self, character: str) -> CharacterTemplate:
        if self.load_timeout is None:
            return await self._perform_load(character)
        return await asyncio.wait_for(self._perform_load(character), self.load_timeout)

    async def _perform_load(self, character: str) -> CharacterTemplate:
        """Resolve a template from the registry without blocking the loop."""
        self.load_count += 1
        await asyncio.sleep(0)
        template = self._registry.get(character)
        if template is None:
            _logger.warning("No template registered for %r, using fallback", character)
            return CharacterTemplate.fallback()
        _logger.debug("Loaded template for %r", character)
        return template

    def is_loaded(self, character: str) -> bool:
        return character in self._cache

    def cleanup(self, max_cache_size: int = DEFAULT_MAX_CACHE_SIZE) -> int:
        """Evict non-basic templates until the cache fits max_cache_size.

        Entries are removed in insertion order, not by recency. Basic
        characters are never removed, so the cache may stay above the
        limit when it holds nothing else.

        Args:
            max_cache_size: Target number of cached templates.

        Returns:
            Number of templates removed.
        """
        if len(self._cache) <= max_cache_size:
            return 0

        removable = [c for c in self._cache if c not in self._basic]
        remove_count = min(len(self._cache) - max_cache_size, len(removable))
        for char in removable[:remove_count]:
            del self._cache[char]

        _logger.info("Template cache cleanup: removed %d, %d remain",
                     remove_count, len(self._cache))
        return remove_count

    def clear(self) -> None:
        """Drop every cached template and pending load, then preload the basic set."""
        self._cache.clear()
        self._pending.clear()
        self._preload_basic()
        _logger.info("Template cache cleared")

    def memory_usage(self) -> dict:
        return {
            'cached_templates': len(self._cache),
            'loading': len(self._pending),
            'total_supported': len(self._registry),
        }

    def is_supported(self, character: str) -> bool:
        """Check if the registry has a template for a character."""
        return character in self._registry

    def supported_characters(self) -> List[str]:
        return sorted(self._registry.keys())

    def template_info(self) -> Dict[str, dict]:
        """Describe every registered template and whether it is cached."""
        info = {}
        for char, template in self._registry.items():
            entry = template.to_dict()
            entry['supported'] = True
            entry['loaded'] = char in self._cache
            info[char] = entry
        return info

    def characters_by_complexity(self) -> Dict[str, List[str]]:
        """Group registered characters into simple (<0.3), medium (<0.7) and complex."""
        groups = {'simple': [], 'medium': [], 'complex': []}
        for char, template in self._registry.items():
            if template.complexity < 0.3:
                groups['simple'].append(char)
            elif template.complexity < 0.7:
                groups['medium'].append(char)
            else:
                groups['complex'].append(char)
        return groups
