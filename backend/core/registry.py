# core/registry.py: Provider registry shared by modules
#
# Modules advertise the services they implement (IMPLEMENTS) and look up the
# ones they need (REQUIRES). The app factory checks that every requirement has
# a provider once all modules are registered.

import logging
from typing import Any

log = logging.getLogger("filadex.registry")


class ModuleRegistry:
    """Maps interface names to the objects that implement them."""

    def __init__(self):
        self._providers: dict[str, Any] = {}
        self._declared_requires: list[tuple[str, str]] = []  # (module_id, interface)

    def register_provider(self, interface_name: str, impl: Any) -> None:
        """Register an implementation; a later registration replaces an earlier one."""
        existing = self._providers.get(interface_name)
        if existing is not None and existing is not impl:
            log.warning(
                f"Interface '{interface_name}' already provided by "
                f"{type(existing).__name__!r}; replacing with {type(impl).__name__!r}"
            )
        self._providers[interface_name] = impl
        log.debug(f"Registered provider for '{interface_name}': {type(impl).__name__}")

    def get_provider(self, interface_name: str) -> Any:
        """Return the provider for an interface, or None when nothing registered it."""
        provider = self._providers.get(interface_name)
        if provider is None:
            log.warning(f"No provider registered for interface '{interface_name}'")
        return provider

    def record_requires(self, module_id: str, requires: list[str]) -> None:
        for iface in requires:
            self._declared_requires.append((module_id, iface))

    def validate_dependencies(self) -> bool:
        """Log every unsatisfied REQUIRES declaration. Returns True when none are missing."""
        missing = [
            (module_id, iface)
            for module_id, iface in self._declared_requires
            if iface not in self._providers
        ]
        for module_id, iface in missing:
            log.error(f"Unsatisfied dependency: module '{module_id}' requires '{iface}'")
        if not missing:
            log.info(f"All module dependencies satisfied ({len(self._declared_requires)} declarations checked)")
        return not missing

    @property
    def providers(self) -> dict[str, Any]:
        """Read-only view of all registered providers."""
        return dict(self._providers)


registry = ModuleRegistry()
