"""Tests for manifest loading and the memoized manifest graph."""

import json

import pytest

from pkg_uninstaller.analysis.manifest import (
    DependencySection,
    Manifest,
    ManifestGraph,
    load_root_manifest,
)
from pkg_uninstaller.errors import LookupWarning, PreconditionError


class TestRootManifest:
    def test_declarations_keep_section_and_order(self, make_project):
        root = make_project({
            "name": "app",
            "dependencies": {"react": "^18.0.0", "lodash": "^4.17.0"},
            "devDependencies": {"jest": "^29.0.0"},
            "peerDependencies": {"react": ">=17"},
            "optionalDependencies": {"fsevents": "*"},
        })

        project = load_root_manifest(root)

        assert [d.label for d in project.declarations()] == [
            "react (dependencies)",
            "lodash (dependencies)",
            "jest (devDependencies)",
            "react (peerDependencies)",
            "fsevents (optionalDependencies)",
        ]
        assert project.declared_names(DependencySection.RUNTIME) == ["react", "lodash"]
        assert project.all_dependencies() == {
            "react": "^18.0.0", "lodash": "^4.17.0", "jest": "^29.0.0", "fsevents": "*",
        }

    def test_missing_manifest_is_a_precondition_error(self, tmp_path):
        with pytest.raises(PreconditionError):
            load_root_manifest(tmp_path)

    def test_invalid_json_is_a_precondition_error(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json")
        with pytest.raises(PreconditionError):
            load_root_manifest(tmp_path)

    def test_non_object_manifest_is_a_precondition_error(self, tmp_path):
        (tmp_path / "package.json").write_text("[]")
        with pytest.raises(PreconditionError):
            load_root_manifest(tmp_path)

    def test_malformed_section_is_ignored(self, make_project):
        root = make_project({"dependencies": ["react"], "devDependencies": {"jest": "29"}})
        project = load_root_manifest(root)
        assert project.declared_names() == ["jest"]


class TestManifestGraph:
    def test_lookup_is_memoized(self, make_project):
        root = make_project({}, installed={"react-dom": {"peerDependencies": {"react": "^18"}}})
        graph = ManifestGraph(root)

        first = graph.get("react-dom")
        (root / "node_modules" / "react-dom" / "package.json").write_text(json.dumps({"name": "changed"}))
        second = graph.get("react-dom")

        assert first is second
        assert graph.peer_dependencies("react-dom") == {"react": "^18"}
        assert "react-dom" in graph
        assert len(graph) == 1

    def test_missing_manifest_yields_empty_and_warns_once(self, make_project, caplog):
        root = make_project({})
        graph = ManifestGraph(root)

        assert graph.get("left-pad").is_empty()
        assert graph.get("left-pad").is_empty()

        assert len(graph.warnings) == 1
        assert isinstance(graph.warnings[0], LookupWarning)
        assert graph.warnings[0].dependency == "left-pad"
        assert "not found" in caplog.text

    def test_unreadable_manifest_is_folded_into_warning(self, make_project):
        root = make_project({})
        broken = root / "node_modules" / "broken"
        broken.mkdir(parents=True)
        (broken / "package.json").write_text("{oops")

        graph = ManifestGraph(root)

        assert graph.get("broken") == Manifest(name="broken")
        assert graph.warnings[0].dependency == "broken"

    def test_scoped_manifest_path(self, make_project):
        root = make_project({}, installed={"@babel/core": {"dependencies": {"@babel/parser": "^7"}}})
        graph = ManifestGraph(root)

        assert graph.manifest_path("@babel/core") == root.resolve() / "node_modules" / "@babel" / "core" / "package.json"
        assert graph.requirements("@babel/core") == {"@babel/parser": "^7"}

    def test_requirements_merge_runtime_and_optional(self, make_project):
        root = make_project({}, installed={
            "pkg": {"dependencies": {"a": "1"}, "optionalDependencies": {"b": "2"}, "devDependencies": {"c": "3"}},
        })
        assert ManifestGraph(root).requirements("pkg") == {"a": "1", "b": "2"}
