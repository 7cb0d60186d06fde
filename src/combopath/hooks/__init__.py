"""Interception layer.

The registry installs wrappers at most once; the interceptor factories
build the resolver-first wrappers for the host's filename resolver,
XML string reader and store combination resolver.
"""
from __future__ import annotations

from combopath.hooks.interceptors import (
    filename_interceptor,
    is_combination_xml_key,
    store_resolve_interceptor,
    xml_string_interceptor,
)
from combopath.hooks.registry import (
    HookNotFoundError,
    HookRegistry,
    HookTargetError,
    InstalledHook,
)

__all__ = [
    "HookNotFoundError",
    "HookRegistry",
    "HookTargetError",
    "InstalledHook",
    "filename_interceptor",
    "is_combination_xml_key",
    "store_resolve_interceptor",
    "xml_string_interceptor",
]
