"""Tests for complexity_insight.graph.adjacency."""

import pytest

from complexity_insight.graph.adjacency import (
    build_adjacency,
    check_dependency,
    path_sort_key,
    resolve_dependency_path,
    sort_reports,
)
from complexity_insight.models import Dependency, ModuleReport


def _report(path: str, *dependencies) -> ModuleReport:
    return ModuleReport(path=path, dependencies=list(dependencies))


class TestPathSort:
    def test_shallow_paths_first(self):
        paths = ["/p/lib/a.js", "/p/z.js", "/p/lib/deep/b.js", "/p/b.js"]
        assert sorted(paths, key=path_sort_key) == [
            "/p/b.js",
            "/p/z.js",
            "/p/lib/a.js",
            "/p/lib/deep/b.js",
        ]

    def test_sort_reports_does_not_mutate_input(self):
        reports = [_report("/p/b.js"), _report("/p/a.js")]
        ordered = sort_reports(reports)
        assert [r.path for r in ordered] == ["/p/a.js", "/p/b.js"]
        assert [r.path for r in reports] == ["/p/b.js", "/p/a.js"]


class TestCheckDependency:
    def test_relative_commonjs_resolves(self):
        dep = Dependency("CommonJS", "./b")
        assert check_dependency("/p/a.js", dep, "/p/b.js")

    def test_parent_relative_commonjs_resolves(self):
        dep = Dependency("CommonJS", "../util.js")
        assert check_dependency("/p/lib/a.js", dep, "/p/util.js")

    def test_bare_commonjs_never_matches(self):
        dep = Dependency("CommonJS", "lodash")
        assert not check_dependency("/p/a.js", dep, "/p/lodash.js")

    def test_other_kinds_resolve_unconditionally(self):
        dep = {"type": "AMD", "path": "lodash"}
        assert check_dependency("/p/a.js", dep, "/p/lodash.js")

    def test_explicit_extension_kept(self):
        dep = Dependency("CommonJS", "./b.json")
        assert not check_dependency("/p/a.js", dep, "/p/b.js")
        assert check_dependency("/p/a.js", dep, "/p/b.json")

    def test_record_without_path(self):
        assert not check_dependency("/p/a.js", {"type": "AMD"}, "/p/b.js")

    def test_resolution_normalizes(self):
        assert resolve_dependency_path("/p/lib/a.js", "./../b", "/p/b.js") == "/p/b.js"


class TestBuildAdjacency:
    def test_empty(self):
        assert build_adjacency([]) == ([], 0)

    def test_chain(self):
        reports = [
            _report("/p/a.js", Dependency("CommonJS", "./b")),
            _report("/p/b.js", Dependency("CommonJS", "./c")),
            _report("/p/c.js"),
        ]
        matrix, density = build_adjacency(reports)
        assert matrix == [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
        assert density == pytest.approx(2 / 9 * 100)

    def test_indices_follow_path_order_not_input_order(self):
        reports = [
            _report("/p/b.js"),
            _report("/p/a.js", Dependency("CommonJS", "./b")),
        ]
        matrix, _ = build_adjacency(reports)
        assert matrix == [[0, 1], [0, 0]]

    def test_shallow_module_gets_first_index(self):
        reports = [
            _report("/p/lib/a.js", Dependency("CommonJS", "../z")),
            _report("/p/z.js"),
        ]
        matrix, _ = build_adjacency(reports)
        assert matrix == [[0, 0], [1, 0]]

    def test_self_dependency_ignored(self):
        matrix, density = build_adjacency([_report("/p/a.js", Dependency("CommonJS", "./a"))])
        assert matrix == [[0]]
        assert density == 0

    def test_duplicate_dependencies_count_once(self):
        reports = [
            _report("/p/a.js", Dependency("CommonJS", "./b"), Dependency("CommonJS", "./b.js")),
            _report("/p/b.js"),
        ]
        matrix, density = build_adjacency(reports)
        assert matrix == [[0, 1], [0, 0]]
        assert density == pytest.approx(25.0)
