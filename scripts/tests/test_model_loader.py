"""Tests for model_loader.py: build-model JSON loading."""

import pytest

from pomdeps.errors import BuildModelError
from pomdeps.mapping import COMPILE_PRIORITY
from pomdeps.model_loader import load_build_model, parse_build_model
from pomdeps.models import DependencyArtifact, ExcludeRule, ProjectDependency, PublishArtifact


def _model(*projects, **extra):
    data = {"projects": list(projects)}
    data.update(extra)
    return data


class TestLoadBuildModel:
    def test_minimal_project(self, write_model):
        model = load_build_model(write_model(_model({"path": ":app", "group": "com.example", "version": "1.0"})))
        project = model.project(":app")
        assert project.name == "app"
        assert project.group == "com.example"
        assert project.configurations == {}
        assert model.skip_unmapped is True

    def test_dependencies_parsed(self, write_model):
        path = write_model(_model({
            "path": ":app",
            "configurations": [{
                "name": "compile",
                "excludes": [{"group": "commons-logging"}],
                "dependencies": [{
                    "group": "org.lwjgl", "name": "lwjgl", "version": "3.3.3", "transitive": False,
                    "artifacts": [{"name": "lwjgl", "type": "jar", "classifier": "natives-linux"}],
                    "excludes": [{"group": "org.x", "module": "y"}],
                }],
            }],
        }))
        compile_conf = load_build_model(path).project(":app").configurations["compile"]
        assert compile_conf.exclude_rules == [ExcludeRule("commons-logging", None)]
        [dep] = compile_conf.dependencies
        assert (dep.group, dep.name, dep.version, dep.transitive) == ("org.lwjgl", "lwjgl", "3.3.3", False)
        assert dep.artifacts == [DependencyArtifact("lwjgl", "jar", "natives-linux")]
        assert dep.exclude_rules == [ExcludeRule("org.x", "y")]

    def test_shared_declaration_by_id(self, write_model):
        path = write_model(_model({
            "path": ":app",
            "configurations": [
                {"name": "compile", "dependencies": [{"id": "guava", "group": "g", "name": "guava", "version": "1"}]},
                {"name": "testCompile", "dependencies": [{"id": "guava"}]},
            ],
        }))
        confs = load_build_model(path).project(":app").configurations
        assert confs["compile"].dependencies[0] is confs["testCompile"].dependencies[0]

    def test_same_coordinates_without_id_are_distinct(self, write_model):
        dep = {"group": "g", "name": "guava", "version": "1"}
        path = write_model(_model({
            "path": ":app",
            "configurations": [
                {"name": "compile", "dependencies": [dep]},
                {"name": "testCompile", "dependencies": [dep]},
            ],
        }))
        confs = load_build_model(path).project(":app").configurations
        assert confs["compile"].dependencies[0] is not confs["testCompile"].dependencies[0]

    def test_project_dependency_declared_before_target(self, write_model):
        path = write_model(_model(
            {"path": ":app", "configurations": [
                {"name": "compile", "dependencies": [{"project": ":lib", "configuration": "runtime"}]},
            ]},
            {"path": ":lib", "group": "com.example", "version": "2.0", "archivesBaseName": "acme-lib",
             "configurations": [{"name": "runtime", "artifacts": [{"name": "lib"}, {"name": "lib", "classifier": "tests"}]}]},
        ))
        model = load_build_model(path)
        [dep] = model.project(":app").configurations["compile"].dependencies
        assert isinstance(dep, ProjectDependency)
        assert dep.project is model.project(":lib")
        assert (dep.group, dep.name, dep.version) == ("com.example", "lib", "2.0")
        assert dep.project_configuration.artifacts == [
            PublishArtifact("lib", "jar"), PublishArtifact("lib", "jar", "tests"),
        ]
        assert dep.project.archives_base_name == "acme-lib"

    def test_unknown_project_dependency(self, write_model):
        path = write_model(_model({"path": ":app", "configurations": [
            {"name": "compile", "dependencies": [{"project": ":missing"}]},
        ]}))
        with pytest.raises(BuildModelError, match=":missing"):
            load_build_model(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(BuildModelError, match="Invalid JSON"):
            load_build_model(path)

    def test_missing_dependency_name(self):
        with pytest.raises(BuildModelError, match="name"):
            parse_build_model(_model({"path": ":app", "configurations": [
                {"name": "compile", "dependencies": [{"group": "g"}]},
            ]}))

    def test_missing_projects(self):
        with pytest.raises(BuildModelError, match="projects"):
            parse_build_model({})

    def test_unknown_project_path(self):
        with pytest.raises(BuildModelError):
            parse_build_model(_model({"path": ":app"})).project(":other")

    def test_project_dependency_on_unknown_configuration(self):
        with pytest.raises(BuildModelError, match="'default' of project ':lib'"):
            parse_build_model(_model(
                {"path": ":app", "configurations": [
                    {"name": "compile", "dependencies": [{"project": ":lib"}]},
                ]},
                {"path": ":lib", "configurations": [{"name": "runtime"}]},
            ))

    def test_null_lists_are_empty(self):
        model = parse_build_model(_model(
            {"path": ":app", "configurations": [
                {"name": "compile", "artifacts": None, "excludes": None, "dependencies": [
                    {"group": "g", "name": "a", "artifacts": None, "excludes": None},
                ]},
                {"name": "runtime", "dependencies": None},
            ]},
            {"path": ":lib", "configurations": None},
        ))
        confs = model.project(":app").configurations
        [dep] = confs["compile"].dependencies
        assert dep.artifacts == [] and dep.exclude_rules == []
        assert confs["compile"].artifacts == []
        assert confs["runtime"].dependencies == []
        assert model.project(":lib").configurations == {}

    def test_non_list_value_rejected(self):
        with pytest.raises(BuildModelError, match="'artifacts'"):
            parse_build_model(_model({"path": ":app", "configurations": [
                {"name": "compile", "artifacts": "app.jar"},
            ]}))

    def test_non_object_exclude_rule_rejected(self):
        with pytest.raises(BuildModelError, match="exclude rule"):
            parse_build_model(_model({"path": ":app", "configurations": [
                {"name": "compile", "excludes": ["org.x"]},
            ]}))

    def test_non_object_dependency_exclude_rule_rejected(self):
        with pytest.raises(BuildModelError, match="exclude rule"):
            parse_build_model(_model({"path": ":app", "configurations": [
                {"name": "compile", "dependencies": [{"name": "a", "excludes": ["org.x"]}]},
            ]}))

    def test_reused_id_with_content_rejected(self):
        with pytest.raises(BuildModelError, match="guava"):
            parse_build_model(_model({"path": ":app", "configurations": [
                {"name": "compile", "dependencies": [{"id": "guava", "group": "g", "name": "guava", "version": "1"}]},
                {"name": "testCompile", "dependencies": [{"id": "guava", "version": "2"}]},
            ]}))


class TestScopeMappings:
    def test_defaults_when_absent(self):
        model = parse_build_model(_model({"path": ":app", "configurations": [
            {"name": "compile"}, {"name": "custom"},
        ]}))
        table = model.scope_mappings(":app")
        compile_conf = model.project(":app").configurations["compile"]
        assert table.mappings[compile_conf].priority == COMPILE_PRIORITY
        assert len(table.mappings) == 1

    def test_explicit_mappings(self):
        model = parse_build_model(_model(
            {"path": ":app",
             "configurations": [{"name": "implementation"}],
             "mappings": [{"configuration": "implementation", "scope": "compile", "priority": 7}]},
            skipUnmapped=False,
        ))
        table = model.scope_mappings(":app")
        conf = model.project(":app").configurations["implementation"]
        assert table.lookup([conf]).scope == "compile"
        assert table.lookup([conf]).priority == 7
        assert table.skip_unmapped is False

    def test_null_priority_ranks_as_zero(self):
        model = parse_build_model(_model({
            "path": ":app",
            "configurations": [{"name": "compile"}, {"name": "testCompile"}],
            "mappings": [
                {"configuration": "compile", "scope": "compile", "priority": None},
                {"configuration": "testCompile", "scope": "test", "priority": -1},
            ],
        }))
        table = model.scope_mappings(":app")
        confs = model.project(":app").configurations
        assert table.mappings[confs["compile"]].priority == 0
        assert table.lookup(list(confs.values())).scope == "compile"

    def test_unknown_configuration_warns(self, capsys):
        model = parse_build_model(_model({
            "path": ":app",
            "mappings": [{"configuration": "nope", "scope": "compile", "priority": 1}],
        }))
        table = model.scope_mappings(":app")
        assert table.mappings == {}
        assert "WARNING" in capsys.readouterr().err
