"""Configuration-scoped build dependencies to Maven POM dependency conversion."""

from .converter import convert
from .errors import BuildModelError, DependencyConversionError, PomConversionError, ScopeMappingError
from .model_loader import load_build_model
from .models import (
    Configuration,
    DependencyArtifact,
    ExcludeRule,
    Exclusion,
    MavenDependency,
    ModuleDependency,
    Project,
    ProjectDependency,
    PublishArtifact,
)
from .scope_mapping import ScopeMappingTable, add_default_mappings

__all__ = [
    "convert", "load_build_model", "ScopeMappingTable", "add_default_mappings",
    "Configuration", "DependencyArtifact", "ExcludeRule", "Exclusion", "MavenDependency",
    "ModuleDependency", "Project", "ProjectDependency", "PublishArtifact",
    "PomConversionError", "DependencyConversionError", "ScopeMappingError", "BuildModelError",
]
