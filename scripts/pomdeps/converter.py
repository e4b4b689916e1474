"""Conversion of configuration-scoped dependencies into a flat Maven list.

The pipeline runs in four stages over one set of configurations:

    1. ``index_dependencies``: dependency → configurations declaring it
    2. ``resolve_scopes``: dependency → (scope, priority), unmapped dropped
    3. ``expand_dependency``: one dependency → one or more Maven records,
       each carrying the result of ``collect_exclusions``
    4. ``DependencyDeduplicator``: one record per management key, highest
       priority wins

Dependency declarations are tracked by identity until stage 4, which switches
to Maven's management key (groupId, artifactId, type, classifier).
"""

from collections import OrderedDict
from typing import Callable, Optional

from .errors import DependencyConversionError
from .mapping import EXCLUDE_ALL, convert_exclude_rule, map_version, project_artifact_id
from .models import Configuration, MavenDependency, ModuleDependency, ProjectDependency


def index_dependencies(configurations) -> "OrderedDict[ModuleDependency, list[Configuration]]":
    """Group dependency declarations by the configurations declaring them.

    Keys are the declaration objects themselves, so a dependency shared by
    several configurations is one entry while two equal-looking declarations
    stay separate.

    Args:
        configurations: Iterable of configurations, in the order to process.

    Returns:
        Insertion-ordered mapping of dependency → distinct configurations.
    """
    index = OrderedDict()
    for configuration in configurations:
        for dependency in configuration.dependencies:
            declaring = index.setdefault(dependency, [])
            if configuration not in declaring:
                declaring.append(configuration)
    return index


def _find_dependency(dependency: ModuleDependency, configuration: Configuration) -> ModuleDependency:
    """Return ``dependency`` as declared on ``configuration``.

    Raises:
        DependencyConversionError: If the configuration does not declare it.
    """
    for declared in configuration.dependencies:
        if declared is dependency:
            return declared
    raise DependencyConversionError(
        f"Dependency {dependency.group}:{dependency.name} could not be found in "
        f"configuration '{configuration.name}' elected by the scope mapping."
    )


def resolve_scopes(scope_mappings, index) -> "OrderedDict[ModuleDependency, tuple]":
    """Decide the Maven scope and priority of every indexed dependency.

    A mapping is used when it has a scope, or when the table does not skip
    unmapped configurations (the dependency then keeps a ``None`` scope).
    Otherwise the dependency is dropped.

    Args:
        scope_mappings: Table providing ``lookup(configurations)`` and
            ``skip_unmapped``.
        index: Output of :func:`index_dependencies`.

    Returns:
        Insertion-ordered mapping of dependency → ``(scope, priority)``.

    Raises:
        DependencyConversionError: If the table elects no mapping, or elects a
            configuration that does not declare the dependency.
    """
    resolved = OrderedDict()
    for dependency, configurations in index.items():
        mapping = scope_mappings.lookup(configurations)
        if mapping is None:
            raise DependencyConversionError(
                f"No scope mapping elected for {dependency.group}:{dependency.name}."
            )
        if mapping.scope is None and scope_mappings.skip_unmapped:
            continue
        priority = mapping.priority if mapping.priority is not None else 0
        resolved[_find_dependency(dependency, mapping.configuration)] = (mapping.scope, priority)
    return resolved


def collect_exclusions(
    dependency: ModuleDependency,
    configurations,
    exclude_rule_converter: Callable = convert_exclude_rule,
) -> list:
    """Compute the Maven exclusions for a dependency.

    A non-transitive dependency excludes everything, whatever other rules
    apply. Otherwise the dependency's own rules and those of every declaring
    configuration are merged (duplicates collapse, first occurrence keeps its
    position) and converted; rules the converter rejects are dropped.

    Args:
        dependency: The dependency declaration.
        configurations: Configurations declaring the dependency.
        exclude_rule_converter: Maps an exclude rule to an exclusion or ``None``.

    Returns:
        List of exclusions in deterministic order.
    """
    if not dependency.transitive:
        return list(EXCLUDE_ALL)

    rules = OrderedDict.fromkeys(dependency.exclude_rules)
    for configuration in configurations:
        rules.update(OrderedDict.fromkeys(configuration.exclude_rules))

    exclusions = []
    for rule in rules:
        exclusion = exclude_rule_converter(rule)
        if exclusion is not None:
            exclusions.append(exclusion)
    return exclusions


def expand_dependency(
    dependency: ModuleDependency,
    scope: Optional[str],
    exclusions: list,
    version_mapper: Callable = map_version,
    artifact_id_deriver: Callable = project_artifact_id,
) -> list:
    """Expand one dependency declaration into Maven dependency records.

    - Project dependency: one record per artifact published by the target
      configuration, under the project's artifactId. Classifiers are kept only
      when non-empty.
    - Dependency with explicit artifacts: one record per artifact.
    - Otherwise: a single record named after the dependency.

    Args:
        dependency: The dependency declaration.
        scope: Maven scope elected for it.
        exclusions: Exclusions from :func:`collect_exclusions`.
        version_mapper: Maps the declared version to Maven syntax.
        artifact_id_deriver: Computes the artifactId of a project dependency.

    Returns:
        List of :class:`MavenDependency`, in expansion order.
    """
    if isinstance(dependency, ProjectDependency):
        artifact_id = artifact_id_deriver(dependency)
        coordinates = [
            (artifact_id, None, artifact.classifier or None)
            for artifact in dependency.project_configuration.artifacts
        ]
    elif dependency.artifacts:
        coordinates = [
            (artifact.name, artifact.type, artifact.classifier)
            for artifact in dependency.artifacts
        ]
    else:
        coordinates = [(dependency.name, None, None)]

    version = version_mapper(dependency.version)
    return [
        MavenDependency(
            group_id=dependency.group,
            artifact_id=artifact_id,
            version=version,
            type=dep_type,
            classifier=classifier,
            scope=scope,
            exclusions=list(exclusions),
        )
        for artifact_id, dep_type, classifier in coordinates
    ]


class DependencyDeduplicator:
    """Keeps one Maven dependency per management key, by scope priority.

    A later dependency with a strictly higher priority replaces the earlier
    one outright (version and exclusions included) and moves to the end of the
    order. Equal or lower priorities are discarded.
    """

    def __init__(self):
        self._entries = OrderedDict()

    def add(self, dependency: MavenDependency, priority: int) -> bool:
        """Offer a dependency; return ``True`` if it was kept."""
        key = dependency.management_key
        existing = self._entries.get(key)
        if existing is not None:
            if priority <= existing[1]:
                return False
            del self._entries[key]
        self._entries[key] = (dependency, priority)
        return True

    def dependencies(self) -> list:
        """Surviving dependencies in order, priorities dropped."""
        return [dependency for dependency, _ in self._entries.values()]


def convert(
    scope_mappings,
    configurations,
    version_mapper: Callable = map_version,
    exclude_rule_converter: Callable = convert_exclude_rule,
    artifact_id_deriver: Callable = project_artifact_id,
) -> list:
    """Convert configuration-scoped dependencies into a flat Maven list.

    Args:
        scope_mappings: Table providing ``lookup(configurations)`` and
            ``skip_unmapped`` (see :class:`~pomdeps.scope_mapping.ScopeMappingTable`).
        configurations: Configurations whose dependencies to convert.
        version_mapper: Maps version expressions to Maven syntax.
        exclude_rule_converter: Maps exclude rules to Maven exclusions.
        artifact_id_deriver: Computes artifactIds of project dependencies.

    Returns:
        Ordered list of :class:`MavenDependency`, unique by management key.

    Raises:
        DependencyConversionError: On an internal consistency failure; no
            partial result is returned.
    """
    index = index_dependencies(configurations)
    resolved = resolve_scopes(scope_mappings, index)

    deduplicator = DependencyDeduplicator()
    for dependency, (scope, priority) in resolved.items():
        exclusions = collect_exclusions(dependency, index[dependency], exclude_rule_converter)
        for maven_dependency in expand_dependency(
            dependency, scope, exclusions, version_mapper, artifact_id_deriver,
        ):
            deduplicator.add(maven_dependency, priority)
    return deduplicator.dependencies()
