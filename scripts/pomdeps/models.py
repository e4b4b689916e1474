"""Build model and Maven output data classes.

Pure data structures on both sides of the conversion: the build tool's
configurations and dependency declarations going in, Maven dependency
records coming out. No behavior or imports from other pomdeps modules.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ExcludeRule:
    """A build-side exclude rule.

    Either side may be ``None``, meaning "any". Rules compare by value so that
    the same rule declared on a dependency and on a configuration collapses.

    Attributes:
        group: Group to exclude, or ``None``.
        module: Module name to exclude, or ``None``.
    """
    group: Optional[str] = None
    module: Optional[str] = None


@dataclass(frozen=True)
class Exclusion:
    """A Maven ``<exclusion>`` element (``*`` matches anything)."""
    group_id: str
    artifact_id: str


@dataclass(frozen=True)
class DependencyArtifact:
    """An artifact explicitly requested on a dependency declaration.

    Attributes:
        name: Artifact name, used as the Maven artifactId.
        type: Artifact type (e.g. ``jar``, ``zip``).
        classifier: Optional classifier (e.g. ``sources``, ``jdk15``).
        extension: Optional file extension.
    """
    name: str
    type: Optional[str] = None
    classifier: Optional[str] = None
    extension: Optional[str] = None


@dataclass(frozen=True)
class PublishArtifact:
    """An artifact published by a configuration of a project."""
    name: str
    type: Optional[str] = "jar"
    classifier: Optional[str] = None
    extension: Optional[str] = None


@dataclass(eq=False)
class ModuleDependency:
    """A dependency declaration attached to one or more configurations.

    Compared and hashed by identity: two declarations with the same
    coordinates (but possibly different exclude rules) are distinct, while a
    single declaration shared by several configurations is one key.

    Attributes:
        group: Dependency group (becomes the Maven groupId).
        name: Dependency name (the default Maven artifactId).
        version: Version expression, possibly a dynamic version or range.
        transitive: ``False`` disables pulling in transitive dependencies.
        artifacts: Explicitly requested artifacts, if any.
        exclude_rules: Exclude rules declared on the dependency itself.
    """
    group: Optional[str]
    name: str
    version: Optional[str] = None
    transitive: bool = True
    artifacts: list = field(default_factory=list)
    exclude_rules: list = field(default_factory=list)


@dataclass(eq=False)
class Configuration:
    """A named bucket of dependency declarations.

    Attributes:
        name: Configuration name (e.g. ``compile``, ``testRuntime``).
        dependencies: Dependencies declared directly on this configuration.
        exclude_rules: Exclude rules applied to every dependency in it.
        artifacts: Artifacts this configuration publishes.
    """
    name: str
    dependencies: list = field(default_factory=list)
    exclude_rules: list = field(default_factory=list)
    artifacts: list = field(default_factory=list)

    def __repr__(self):
        return f"Configuration({self.name!r})"


@dataclass(eq=False)
class Project:
    """A project in a multi-project build.

    Attributes:
        path: Project path (e.g. ``:sub``).
        name: Project name.
        group: Project group.
        version: Project version.
        archives_base_name: Base name of published archives, when it differs
            from the project name.
        configurations: Configurations by name.
    """
    path: str
    name: str
    group: Optional[str] = None
    version: Optional[str] = None
    archives_base_name: Optional[str] = None
    configurations: dict = field(default_factory=dict)


@dataclass(eq=False)
class ProjectDependency(ModuleDependency):
    """A dependency on another project of the same build.

    Attributes:
        project: The target project.
        target_configuration: Name of the target project's configuration whose
            published artifacts the dependency resolves to.
    """
    project: Optional[Project] = None
    target_configuration: str = "default"

    @property
    def project_configuration(self) -> Configuration:
        return self.project.configurations[self.target_configuration]


@dataclass(frozen=True)
class ScopeMapping:
    """Result of a scope-mapping lookup for a set of configurations.

    Attributes:
        configuration: The configuration elected as authoritative.
        scope: Maven scope, or ``None`` when the configuration is unmapped.
        priority: Mapping priority, or ``None`` when unmapped.
    """
    configuration: Configuration
    scope: Optional[str] = None
    priority: Optional[int] = None


@dataclass
class MavenDependency:
    """A Maven ``<dependency>`` ready for POM serialization.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId.
        version: Version already mapped to Maven syntax.
        type: Packaging type, or ``None``.
        classifier: Classifier, or ``None``.
        scope: Maven scope, or ``None``.
        exclusions: List of :class:`Exclusion`.
    """
    group_id: Optional[str]
    artifact_id: str
    version: Optional[str] = None
    type: Optional[str] = None
    classifier: Optional[str] = None
    scope: Optional[str] = None
    exclusions: list = field(default_factory=list)

    @property
    def management_key(self) -> tuple:
        """Identity Maven uses to consider two entries the same dependency.

        Scope, version and exclusions are not part of the key.
        """
        return (self.group_id, self.artifact_id, self.type, self.classifier)
