"""Resolver-first wrappers for the three intercepted host capabilities.

Each function here returns a *wrapper factory* for
:meth:`~combopath.hooks.registry.HookRegistry.install`: it receives the
original host callable and returns the replacement.

- ``filename_interceptor``: the host's "resolve a filename against a
  base directory" utility.  Called for almost every path the game
  loads, so anything that is not a foreign-mod token passes straight
  through.
- ``xml_string_interceptor``: the host's "read a string from an XML
  file" method.  Only combination ``xmlFilename`` keys are touched.
- ``store_resolve_interceptor``: the store's "resolve combinations"
  entry point.  Runs the reconciliation pass before delegating.

Resolution failures never raise into the host: the original value is
passed through unchanged.  Errors raised by the original callable
propagate as they would without the hook.
"""
from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable
from typing import Any, Final

from combopath.hooks.registry import WrapperFactory
from combopath.resolver.resolver import TokenResolver

logger = logging.getLogger(__name__)

COMBINATION_XML_KEY: Final[re.Pattern[str]] = re.compile(
    r"vehicle\.combinations\.combination\(\d+\)#xmlFilename"
)


def is_combination_xml_key(key: object) -> bool:
    """Return True for ``vehicle.combinations.combination(<n>)#xmlFilename`` keys."""
    return isinstance(key, str) and COMBINATION_XML_KEY.search(key) is not None


def _trace(resolver: TokenResolver, message: str, *args: object) -> None:
    level = logging.INFO if resolver.settings.debug else logging.DEBUG
    logger.log(level, message, *args)


def filename_interceptor(resolver: TokenResolver) -> WrapperFactory:
    """Wrap ``get_filename(filename, base_dir, ...)``.

    A *filename* that loosely resolves to a foreign-mod path is replaced
    by the resolved path before the original is called.
    """

    def factory(original: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(original)
        def get_filename(filename: Any, *args: Any, **kwargs: Any) -> Any:
            if isinstance(filename, str):
                fixed = resolver.resolve_loose(filename)
                if fixed is not None:
                    _trace(resolver, "get_filename resolved %r -> %r", filename, fixed)
                    return original(fixed, *args, **kwargs)
            return original(filename, *args, **kwargs)

        return get_filename

    return factory


def xml_string_interceptor(resolver: TokenResolver) -> WrapperFactory:
    """Wrap the unbound ``get_string(self, key, default, ...)`` method."""

    def factory(original: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(original)
        def get_string(self: Any, key: Any, *args: Any, **kwargs: Any) -> Any:
            value = original(self, key, *args, **kwargs)
            if isinstance(value, str) and is_combination_xml_key(key):
                fixed = resolver.resolve_loose(value)
                if fixed is not None and fixed != value:
                    _trace(resolver, "get_string resolved %r -> %r for key %r", value, fixed, key)
                    return fixed
            return value

        return get_string

    return factory


def store_resolve_interceptor(reconcile: Callable[[], object]) -> WrapperFactory:
    """Wrap a bound ``resolve_combinations(...)`` so *reconcile* runs first."""

    def factory(original: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(original)
        def resolve_combinations(*args: Any, **kwargs: Any) -> Any:
            reconcile()
            return original(*args, **kwargs)

        return resolve_combinations

    return factory
