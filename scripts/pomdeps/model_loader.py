"""Build-model loading from JSON.

Reads a JSON description of a (multi-project) build into the pomdeps data
classes: projects, their configurations, dependency declarations, exclude
rules, published artifacts, and configuration-to-scope mappings.

Layout::

    {
      "skipUnmapped": true,
      "projects": [
        {
          "path": ":app", "name": "app", "group": "com.example", "version": "1.0",
          "archivesBaseName": "app-core",
          "mappings": [{"configuration": "compile", "scope": "compile", "priority": 300}],
          "configurations": [
            {
              "name": "compile",
              "excludes": [{"group": "commons-logging"}],
              "artifacts": [{"name": "app", "type": "jar", "classifier": "tests"}],
              "dependencies": [
                {"id": "guava", "group": "com.google.guava", "name": "guava", "version": "33.0"},
                {"project": ":lib", "configuration": "default"}
              ]
            },
            {"name": "testCompile", "dependencies": [{"id": "guava"}]}
          ]
        }
      ]
    }

A dependency entry whose ``id`` was already seen reuses the earlier declaration
object, which is how one declaration is shared between configurations. Such a
reference carries the ``id`` alone; any other key is rejected.
Without a ``mappings`` list, the conventional defaults are registered.
"""

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .errors import BuildModelError
from .models import (
    Configuration,
    DependencyArtifact,
    ExcludeRule,
    ModuleDependency,
    Project,
    ProjectDependency,
    PublishArtifact,
)
from .scope_mapping import ScopeMappingTable, add_default_mappings


@dataclass
class BuildModel:
    """Central load result for a build-model file.

    Attributes:
        projects: Projects keyed by path, in file order.
        mappings: Raw ``mappings`` entries keyed by project path, or ``None``
            for projects relying on the defaults.
        skip_unmapped: Whether unmapped dependencies are left out.
    """
    projects: dict = field(default_factory=dict)
    mappings: dict = field(default_factory=dict)
    skip_unmapped: bool = True

    def project(self, path: str) -> Project:
        """Return the project at ``path``.

        Raises:
            BuildModelError: If no such project exists.
        """
        if path not in self.projects:
            raise BuildModelError(f"Unknown project '{path}'")
        return self.projects[path]

    def scope_mappings(self, path: str) -> ScopeMappingTable:
        """Build the scope-mapping table for the project at ``path``.

        Entries naming a configuration the project does not define are
        reported on stderr and skipped.
        """
        project = self.project(path)
        table = ScopeMappingTable(skip_unmapped=self.skip_unmapped)
        entries = self.mappings.get(path)
        if entries is None:
            return add_default_mappings(table, project.configurations)
        if not isinstance(entries, list):
            raise BuildModelError(f"Expected a list for 'mappings' in project '{path}'")
        for entry in entries:
            name = _require(entry, "configuration", "mapping")
            configuration = project.configurations.get(name)
            if configuration is None:
                print(f"WARNING: Mapping for unknown configuration '{name}' in project "
                      f"'{path}', skipping", file=sys.stderr)
                continue
            table.add_mapping(entry.get("priority"), configuration, entry.get("scope"))
        return table


def _require(data: dict, key: str, what: str):
    """Return ``data[key]``, raising BuildModelError if it is missing."""
    if not isinstance(data, dict):
        raise BuildModelError(f"Expected an object for {what}, got {type(data).__name__}")
    if key not in data:
        raise BuildModelError(f"Missing '{key}' in {what}: {data}")
    return data[key]


def _list(data: dict, key: str, what: str) -> list:
    """Return the list under ``data[key]``; a missing or null value is empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise BuildModelError(f"Expected a list for '{key}' in {what}, got {type(value).__name__}")
    return value


def _parse_exclude_rules(data: dict, what: str) -> list:
    """Parse the ``excludes`` list of ``{"group": ..., "module": ...}`` objects."""
    rules = []
    for entry in _list(data, "excludes", what):
        if not isinstance(entry, dict):
            raise BuildModelError(f"Expected an object for exclude rule in {what}, got {type(entry).__name__}")
        rules.append(ExcludeRule(group=entry.get("group"), module=entry.get("module")))
    return rules


def _parse_dependency(data: dict, shared: dict, projects: dict) -> ModuleDependency:
    """Parse one dependency entry.

    Args:
        data: The dependency JSON object.
        shared: Declarations already seen, keyed by ``id`` (updated in place).
        projects: All projects keyed by path, for project dependencies.

    Returns:
        A ModuleDependency or ProjectDependency, possibly shared.
    """
    if not isinstance(data, dict):
        raise BuildModelError(f"Expected an object for dependency, got {type(data).__name__}")
    dep_id = data.get("id")
    if dep_id is not None and dep_id in shared:
        extra = sorted(set(data) - {"id"})
        if extra:
            raise BuildModelError(
                f"Dependency '{dep_id}' is already declared; a reference may only carry 'id', got {extra}"
            )
        return shared[dep_id]

    if "project" in data:
        target = projects.get(data["project"])
        if target is None:
            raise BuildModelError(f"Dependency on unknown project '{data['project']}'")
        target_configuration = data.get("configuration", "default")
        if target_configuration not in target.configurations:
            raise BuildModelError(
                f"Dependency on unknown configuration '{target_configuration}' of project '{target.path}'"
            )
        dependency = ProjectDependency(
            group=target.group,
            name=target.name,
            version=target.version,
            transitive=data.get("transitive", True),
            exclude_rules=_parse_exclude_rules(data, "dependency"),
            project=target,
            target_configuration=target_configuration,
        )
    else:
        dependency = ModuleDependency(
            group=data.get("group"),
            name=_require(data, "name", "dependency"),
            version=data.get("version"),
            transitive=data.get("transitive", True),
            artifacts=[
                DependencyArtifact(
                    name=_require(a, "name", "dependency artifact"),
                    type=a.get("type"),
                    classifier=a.get("classifier"),
                    extension=a.get("extension"),
                )
                for a in _list(data, "artifacts", "dependency")
            ],
            exclude_rules=_parse_exclude_rules(data, "dependency"),
        )

    if dep_id is not None:
        shared[dep_id] = dependency
    return dependency


def _parse_configuration(data: dict) -> Configuration:
    """Parse a configuration's name, exclude rules and published artifacts.

    Dependencies are filled in by a second pass once every project exists.
    """
    return Configuration(
        name=_require(data, "name", "configuration"),
        exclude_rules=_parse_exclude_rules(data, "configuration"),
        artifacts=[
            PublishArtifact(
                name=_require(a, "name", "published artifact"),
                type=a.get("type", "jar"),
                classifier=a.get("classifier"),
                extension=a.get("extension"),
            )
            for a in _list(data, "artifacts", "configuration")
        ],
    )


def parse_build_model(data: dict) -> BuildModel:
    """Build a BuildModel from already-decoded JSON data.

    Projects and configurations are created first so that project
    dependencies can point at any project regardless of file order.

    Raises:
        BuildModelError: On missing keys or references to unknown projects.
    """
    _require(data, "projects", "build model")
    project_entries = _list(data, "projects", "build model")
    model = BuildModel(skip_unmapped=bool(data.get("skipUnmapped", True)))

    for entry in project_entries:
        path = _require(entry, "path", "project")
        project = Project(
            path=path,
            name=entry.get("name") or path.rsplit(":", 1)[-1],
            group=entry.get("group"),
            version=entry.get("version"),
            archives_base_name=entry.get("archivesBaseName"),
        )
        for conf_data in _list(entry, "configurations", "project"):
            configuration = _parse_configuration(conf_data)
            project.configurations[configuration.name] = configuration
        model.projects[path] = project
        model.mappings[path] = entry.get("mappings")

    shared = {}
    for entry in project_entries:
        project = model.projects[entry["path"]]
        for conf_data in _list(entry, "configurations", "project"):
            configuration = project.configurations[conf_data["name"]]
            for dep_data in _list(conf_data, "dependencies", "configuration"):
                configuration.dependencies.append(_parse_dependency(dep_data, shared, model.projects))
    return model


def load_build_model(path: Path) -> BuildModel:
    """Load a build-model JSON file.

    Args:
        path: Filesystem path to the JSON file.

    Returns:
        The parsed BuildModel.

    Raises:
        BuildModelError: If the file is not valid JSON or is malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BuildModelError(f"Invalid JSON in {path}: {e}") from e
    return parse_build_model(data)
