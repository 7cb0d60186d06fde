"""Foreign-mod token resolution.

Two entry points share one algorithm and differ only in whether the
leading ``$`` of the token is mandatory:

1. Match the token (``$moddir<Name>$/<rest>``, ``$`` optional when loose).
2. Look up ``Name`` in the mod registry; an unknown mod or a mod with
   no directory is unresolvable.
3. Join the mod directory with ``rest`` and normalize.

Unresolvable tokens yield ``None``; reporting is left to the caller.
``resolve_combination_path`` composes strict, then loose, then falls
back to :func:`~combopath.paths.sanitize` so it always returns a path.

Usage
-----
::

    from combopath.host import InMemoryModRegistry
    from combopath.resolver import TokenResolver

    resolver = TokenResolver(InMemoryModRegistry({"Foo": "/mods/Foo/"}))
    resolver.resolve_strict("$moddirFoo$/x.xml")   # '/mods/Foo/x.xml'
    resolver.resolve_loose("moddirFoo$/x.xml")     # '/mods/Foo/x.xml'
"""
from __future__ import annotations

import logging

from combopath.config import Settings
from combopath.grammar.tokens import ModToken, parse_mod_token
from combopath.host.models import ModRegistry
from combopath.paths.normalize import has_parent_segment, safe_join, sanitize

logger = logging.getLogger(__name__)


class TokenResolver:
    """Resolve foreign-mod tokens against a mod registry.

    Parameters
    ----------
    registry:
        The host's mod registry.  Only read.
    settings:
        Resolution settings; defaults to ``Settings()``.
    """

    def __init__(self, registry: ModRegistry, settings: Settings | None = None) -> None:
        self._registry = registry
        self._settings = settings or Settings()

    @property
    def registry(self) -> ModRegistry:
        return self._registry

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def resolve_strict(self, token: str | None) -> str | None:
        """Resolve ``$moddir<Name>$/<rest>``; the leading ``$`` is required."""
        return self.resolve_token(parse_mod_token(token))

    def resolve_loose(self, token: str | None) -> str | None:
        """Resolve ``$moddir<Name>$/<rest>`` or ``moddir<Name>$/<rest>``."""
        return self.resolve_token(parse_mod_token(token, loose=True))

    def resolve_combination_path(self, raw: str | None) -> str | None:
        """Resolve *raw* strictly, then loosely, else return it sanitized.

        Strict goes first so that ``$data/`` and ``$moddir$/`` paths,
        which neither pattern accepts, are only ever sanitized.
        """
        resolved = self.resolve_strict(raw)
        if resolved is not None:
            return resolved
        resolved = self.resolve_loose(raw)
        if resolved is not None:
            return resolved
        return sanitize(raw)

    def resolve_token(self, token: ModToken | None) -> str | None:
        """Resolve an already parsed token, or return ``None``."""
        if token is None:
            return None
        mod_dir = self.mod_directory(token.mod_name)
        if not mod_dir:
            return None
        if self._settings.reject_parent_segments and has_parent_segment(token.rest):
            logger.warning(
                "Refusing to resolve %r: path leaves the directory of mod %r",
                str(token),
                token.mod_name,
            )
            return None
        return safe_join(mod_dir, token.rest)

    def mod_directory(self, mod_name: str) -> str | None:
        """Return the install directory of *mod_name*, or ``None``."""
        record = self._registry.get_mod_by_name(mod_name)
        if record is None:
            logger.debug("Mod %r is not installed", mod_name)
            return None
        return record.mod_dir or None

    def __repr__(self) -> str:
        return f"TokenResolver(registry={self._registry!r})"


# ---------------------------------------------------------------------------
# Functional wrappers
# ---------------------------------------------------------------------------


def resolve_strict(
    token: str | None, registry: ModRegistry, settings: Settings | None = None
) -> str | None:
    """Resolve a strict token against *registry*.  See :class:`TokenResolver`."""
    return TokenResolver(registry, settings).resolve_strict(token)


def resolve_loose(
    token: str | None, registry: ModRegistry, settings: Settings | None = None
) -> str | None:
    """Resolve a token whose leading ``$`` is optional."""
    return TokenResolver(registry, settings).resolve_loose(token)


def resolve_combination_path(
    raw: str | None, registry: ModRegistry, settings: Settings | None = None
) -> str | None:
    """Strict, then loose, then sanitized pass-through."""
    return TokenResolver(registry, settings).resolve_combination_path(raw)
