"""CLI entry point: load a build model, convert, and print the result.

Wires together model loading, scope mapping and conversion for one project
of the build.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .converter import convert
from .errors import PomConversionError
from .mapping import format_dependency
from .model_loader import load_build_model


def convert_project(model_path: Path, project_path: Optional[str] = None) -> list:
    """Convert every configuration of one project in a build-model file.

    Args:
        model_path: Filesystem path to the build-model JSON file.
        project_path: Path of the project to convert. Defaults to the first
            project in the file.

    Returns:
        The converted list of MavenDependency.

    Raises:
        PomConversionError: If the model is malformed or inconsistent.
    """
    model = load_build_model(model_path)
    if project_path is None:
        if not model.projects:
            raise PomConversionError(f"No projects defined in {model_path}")
        project_path = next(iter(model.projects))
    project = model.project(project_path)
    return convert(model.scope_mappings(project_path), project.configurations.values())


def render(dependencies: list, output_format: str = "text") -> str:
    """Render converted dependencies as text lines or a JSON array."""
    if output_format == "json":
        return json.dumps([asdict(d) for d in dependencies], indent=2)
    return "\n".join(format_dependency(d) for d in dependencies)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert a build model's configuration dependencies into a Maven dependency list"
    )
    parser.add_argument("model", type=Path, help="Path to the build-model JSON file")
    parser.add_argument("--project", "-p", default=None, help="Project path to convert (default: first project)")
    parser.add_argument(
        "--format", "-f", dest="output_format", choices=["text", "json"], default="text",
        help="'text' (default) for one line per dependency, 'json' for a JSON array"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """CLI entry point. Parses arguments and delegates to ``convert_project()``."""
    args = parse_args(argv)
    if not args.model.exists():
        print(f"ERROR: No build model found at {args.model}", file=sys.stderr)
        sys.exit(1)
    try:
        dependencies = convert_project(args.model, args.project)
    except PomConversionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    output = render(dependencies, args.output_format)
    if output:
        print(output)
