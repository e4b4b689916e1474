"""Configuration-to-scope mapping table.

Holds one ``(priority, scope)`` mapping per configuration and elects, for a
set of configurations declaring the same dependency, the mapping that decides
the dependency's Maven scope.
"""

from typing import Optional

from .errors import ScopeMappingError
from .mapping import DEFAULT_SCOPE_MAPPINGS
from .models import Configuration, ScopeMapping


class ScopeMappingTable:
    """Registry of configuration → scope mappings.

    Attributes:
        mappings: Registered :class:`ScopeMapping` keyed by configuration.
        skip_unmapped: When ``True``, dependencies whose configurations have no
            mapping are left out of the generated POM.
    """

    def __init__(self, skip_unmapped: bool = True):
        self.mappings = {}
        self.skip_unmapped = skip_unmapped

    def add_mapping(self, priority: int, configuration: Configuration, scope: str):
        """Register (or replace) the mapping for ``configuration``.

        A ``None`` priority is registered as 0, the same default the converter
        applies, so a mapped configuration never ranks as unmapped.
        """
        self.mappings[configuration] = ScopeMapping(configuration, scope, priority if priority is not None else 0)

    def lookup(self, configurations) -> Optional[ScopeMapping]:
        """Elect the mapping for a set of configurations.

        Each configuration contributes its registered mapping, or an unmapped
        placeholder with ``None`` scope and priority. The highest priority
        wins; unmapped placeholders rank below every registered mapping, and
        among placeholders only the first is kept.

        Args:
            configurations: Configurations declaring one dependency.

        Returns:
            The elected mapping, or ``None`` if ``configurations`` is empty.

        Raises:
            ScopeMappingError: If several mappings share the highest priority.
        """
        best = []
        for configuration in configurations:
            candidate = self.mappings.get(configuration) or ScopeMapping(configuration)
            if not best:
                best = [candidate]
                continue
            current = best[0].priority
            if candidate.priority is None:
                continue
            if current is None or candidate.priority > current:
                best = [candidate]
            elif candidate.priority == current:
                best.append(candidate)

        if len(best) > 1:
            names = ", ".join(m.configuration.name for m in best)
            raise ScopeMappingError(
                f"The configuration to scope mapping is not unique. "
                f"The following configurations have the same priority: {names}"
            )
        return best[0] if best else None


def add_default_mappings(table: ScopeMappingTable, configurations_by_name: dict) -> ScopeMappingTable:
    """Register the conventional Java configuration mappings on ``table``.

    Names missing from ``configurations_by_name`` are skipped.

    Args:
        table: The table to populate.
        configurations_by_name: Available configurations keyed by name.

    Returns:
        The same table, for chaining.
    """
    for name, (priority, scope) in DEFAULT_SCOPE_MAPPINGS.items():
        configuration = configurations_by_name.get(name)
        if configuration is not None:
            table.add_mapping(priority, configuration, scope)
    return table
