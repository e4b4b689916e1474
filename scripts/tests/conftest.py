"""Shared test fixtures for the pomdeps test suite."""

import json
from pathlib import Path

import pytest

from pomdeps.models import Configuration, ModuleDependency, Project, PublishArtifact
from pomdeps.scope_mapping import ScopeMappingTable


@pytest.fixture
def write_model(tmp_path):
    """Factory fixture that writes a build-model JSON file and returns its path."""
    def _write(data: dict) -> Path:
        path = tmp_path / "build-model.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def java_configurations():
    """The conventional Java configurations, empty, keyed by name."""
    return {
        name: Configuration(name)
        for name in ["compile", "runtime", "testCompile", "testRuntime"]
    }


@pytest.fixture
def java_table(java_configurations):
    """A scope table mapping the Java configurations with small priorities."""
    table = ScopeMappingTable()
    table.add_mapping(10, java_configurations["compile"], "compile")
    table.add_mapping(5, java_configurations["runtime"], "runtime")
    table.add_mapping(0, java_configurations["testCompile"], "test")
    table.add_mapping(-5, java_configurations["testRuntime"], "test")
    return table


@pytest.fixture
def guava():
    """A plain external dependency declaration."""
    return ModuleDependency(group="com.google.guava", name="guava", version="33.0.0-jre")


@pytest.fixture
def sub_project():
    """A sub-project whose ``runtime`` configuration publishes a jar and a tests jar."""
    runtime = Configuration(
        "runtime",
        artifacts=[
            PublishArtifact(name="sub", type="jar"),
            PublishArtifact(name="sub", type="jar", classifier="tests"),
        ],
    )
    return Project(
        path=":sub",
        name="sub",
        group="com.example",
        version="1.0.0",
        configurations={"runtime": runtime},
    )
