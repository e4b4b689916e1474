"""Build-model to Maven translation tables and helpers.

Pure mapping logic with no file I/O. These are the default collaborators
plugged into the converter: version syntax mapping, exclude rule
conversion, project artifactId derivation, and the conventional
configuration-to-scope table.
"""

import re
from typing import Optional

from .models import Exclusion, ExcludeRule, MavenDependency, ProjectDependency

# Priorities of the conventional configuration → scope mappings.
# Provided configurations rank above compile so that a dependency declared in
# both ends up ``provided``.
COMPILE_PRIORITY = 300
RUNTIME_PRIORITY = 200
TEST_COMPILE_PRIORITY = 150
TEST_RUNTIME_PRIORITY = 100
PROVIDED_COMPILE_PRIORITY = COMPILE_PRIORITY + 100
PROVIDED_RUNTIME_PRIORITY = COMPILE_PRIORITY + 150

# Configuration name → (priority, Maven scope).
DEFAULT_SCOPE_MAPPINGS = {
    "providedRuntime": (PROVIDED_RUNTIME_PRIORITY, "provided"),
    "providedCompile": (PROVIDED_COMPILE_PRIORITY, "provided"),
    "compile": (COMPILE_PRIORITY, "compile"),
    "runtime": (RUNTIME_PRIORITY, "runtime"),
    "testCompile": (TEST_COMPILE_PRIORITY, "test"),
    "testRuntime": (TEST_RUNTIME_PRIORITY, "test"),
}

# Dynamic version keywords with a direct Maven metaversion.
VERSION_KEYWORDS = {
    "latest.integration": "LATEST",
    "latest.release": "RELEASE",
    "+": "LATEST",
}

# The "exclude everything" exclusion list given to non-transitive dependencies.
# Read-only; callers copy it before handing it out.
EXCLUDE_ALL = (Exclusion("*", "*"),)

_PREFIX_VERSION = re.compile(r"^(.+?)\.?\+$")


def map_version(version: Optional[str]) -> Optional[str]:
    """Map a build-tool version expression to Maven version syntax.

    Handles the dynamic forms Maven cannot express directly:

        latest.integration → LATEST
        latest.release     → RELEASE
        +                  → LATEST
        1.+                → [1,)
        1.2+               → [1.2,)

    Fixed versions and Maven-style ranges such as ``[1.0,2.0)`` are returned
    unchanged.

    Args:
        version: The declared version expression, or ``None``.

    Returns:
        The Maven version string, or ``None`` if no version was declared.
    """
    if version is None:
        return None
    if version in VERSION_KEYWORDS:
        return VERSION_KEYWORDS[version]
    match = _PREFIX_VERSION.match(version)
    if match:
        return f"[{match.group(1)},)"
    return version


def convert_exclude_rule(rule: ExcludeRule) -> Optional[Exclusion]:
    """Convert an exclude rule into a Maven exclusion.

    A missing group or module becomes the ``*`` wildcard. A rule with neither
    set cannot be expressed as a Maven exclusion and is rejected.

    Args:
        rule: The exclude rule to convert.

    Returns:
        The Maven exclusion, or ``None`` if the rule is not convertible.
    """
    if rule.group is None and rule.module is None:
        return None
    return Exclusion(rule.group or "*", rule.module or "*")


def project_artifact_id(dependency: ProjectDependency) -> str:
    """Derive the Maven artifactId published by a project dependency's target.

    Projects publish under their archives base name when one is configured,
    otherwise under the project name.
    """
    project = dependency.project
    return project.archives_base_name or project.name


def format_dependency(dep: MavenDependency) -> str:
    """Render a Maven dependency as a one-line summary.

    Format is ``group:artifact[:type][:classifier]:version (scope)`` followed
    by an ``excludes`` list when there are exclusions, e.g.::

        com.example:lib:1.0 (compile) excludes org.slf4j:*

    Args:
        dep: The dependency to render.

    Returns:
        A single line of text.
    """
    parts = [dep.group_id or "", dep.artifact_id]
    if dep.type:
        parts.append(dep.type)
    if dep.classifier:
        parts.append(dep.classifier)
    parts.append(dep.version or "")
    line = ":".join(parts)
    if dep.scope:
        line += f" ({dep.scope})"
    if dep.exclusions:
        excludes = ", ".join(f"{e.group_id}:{e.artifact_id}" for e in dep.exclusions)
        line += f" excludes {excludes}"
    return line
