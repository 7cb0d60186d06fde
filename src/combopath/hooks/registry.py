"""Hook registry for intercepted host capabilities.

A hook replaces an attribute of a host object (a module-like namespace,
a class, or an instance) with a wrapper built from the original value.
The registry remembers every installation, so running the installation
routine again during the same session never wraps a capability twice.

Installation is tracked by hook name per registry, and by the identity
of each installed wrapper across the whole process.  The identity map
catches the same capability reached under a different hook name, or
through a second registry.

Example
-------
::

    from combopath.hooks.registry import HookRegistry

    hooks = HookRegistry("host")

    def shout(original):
        def wrapper(text):
            return original(text).upper()
        return wrapper

    hooks.install("utils.echo", utils, "echo", shout)   # True
    hooks.install("utils.echo", utils, "echo", shout)   # False, already installed
    hooks.uninstall("utils.echo")                       # restores utils.echo
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

WrapperFactory = Callable[[Callable[..., Any]], Callable[..., Any]]

# Every wrapper installed by any registry in this process, by identity.
# Holding the wrapper keeps its id from being reused while it is installed.
_installed_wrappers: dict[int, tuple[str, Callable[..., Any]]] = {}


def _identity(value: Any) -> int:
    return id(getattr(value, "__func__", value))


class HookNotFoundError(KeyError):
    """Raised when a requested hook name is not installed."""

    def __init__(self, name: str, registry_name: str) -> None:
        self.hook_name = name
        self.registry_name = registry_name
        super().__init__(
            f"Hook {name!r} is not installed in the {registry_name!r} registry."
        )


class HookTargetError(AttributeError):
    """Raised when a required hook target does not exist on the host."""

    def __init__(self, name: str, attribute: str) -> None:
        self.hook_name = name
        self.attribute = attribute
        super().__init__(
            f"Cannot install hook {name!r}: host object has no callable {attribute!r}."
        )


@dataclass(frozen=True)
class InstalledHook:
    """Record of one installed hook.

    Parameters
    ----------
    name:
        Registry key of the hook.
    owner:
        The host object whose attribute was replaced.
    attribute:
        Name of the replaced attribute.
    original:
        The attribute value before installation.
    wrapper:
        The value installed in its place.
    """

    name: str
    owner: Any
    attribute: str
    original: Callable[..., Any]
    wrapper: Callable[..., Any]


class HookRegistry:
    """Set-once registry of wrapped host capabilities.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in messages).
    """

    def __init__(self, name: str = "hooks") -> None:
        self._name = name
        self._hooks: dict[str, InstalledHook] = {}
        self._wrapper_ids: dict[int, str] = {}

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    def install(
        self,
        name: str,
        owner: Any,
        attribute: str,
        factory: WrapperFactory,
        *,
        required: bool = False,
    ) -> bool:
        """Replace ``owner.attribute`` with ``factory(original)``, at most once.

        Parameters
        ----------
        name:
            Unique key for this hook.
        owner:
            Host object carrying the capability.  ``None`` means the host
            subsystem is not available.
        attribute:
            Name of the callable attribute to wrap.
        factory:
            Called with the original callable; returns the wrapper.
        required:
            Raise instead of skipping when the target is missing.

        Returns
        -------
        bool
            ``True`` if the hook was installed by this call, ``False`` if
            it was already installed or the target is unavailable.

        Raises
        ------
        HookTargetError
            If ``required`` and the owner or attribute is missing.
        """
        if name in self._hooks:
            logger.debug("Hook %r already installed in %r; skipping.", name, self._name)
            return False

        original = getattr(owner, attribute, None) if owner is not None else None
        if not callable(original):
            if required:
                raise HookTargetError(name, attribute)
            logger.debug("Hook %r target %r is not available; skipping.", name, attribute)
            return False

        installed = _installed_wrappers.get(_identity(original))
        if installed is not None:
            logger.debug(
                "Hook %r target %r is already wrapped by %r; skipping.",
                name,
                attribute,
                installed[0],
            )
            return False

        wrapper = factory(original)
        setattr(owner, attribute, wrapper)
        self._hooks[name] = InstalledHook(name, owner, attribute, original, wrapper)
        self._wrapper_ids[id(wrapper)] = name
        _installed_wrappers[id(wrapper)] = (name, wrapper)
        logger.info("Hooked %s", name)
        return True

    def uninstall(self, name: str) -> None:
        """Restore the original attribute of hook *name*.

        Raises
        ------
        HookNotFoundError
            If *name* is not installed.
        """
        try:
            hook = self._hooks.pop(name)
        except KeyError:
            raise HookNotFoundError(name, self._name) from None
        self._wrapper_ids.pop(id(hook.wrapper), None)
        _installed_wrappers.pop(id(hook.wrapper), None)
        setattr(hook.owner, hook.attribute, hook.original)
        logger.debug("Uninstalled hook %r from registry %r", name, self._name)

    def uninstall_all(self) -> None:
        """Uninstall every hook, most recent first."""
        for name in reversed(list(self._hooks)):
            self.uninstall(name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> InstalledHook:
        """Return the installation record for *name*.

        Raises
        ------
        HookNotFoundError
            If *name* is not installed.
        """
        try:
            return self._hooks[name]
        except KeyError:
            raise HookNotFoundError(name, self._name) from None

    def is_installed(self, name: str) -> bool:
        return name in self._hooks

    def is_wrapper(self, value: object) -> bool:
        """Return True if *value* is a wrapper produced by this registry."""
        return _identity(value) in self._wrapper_ids

    def list_hooks(self) -> list[str]:
        """Return installed hook names in installation order."""
        return list(self._hooks)

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)

    def __repr__(self) -> str:
        return f"HookRegistry(name={self._name!r}, hooks={self.list_hooks()})"
