"""Tests for module_resolution.lookup filesystem probing."""

import json

from bundle_resolver.module_resolution.lookup import escapes_upward
from bundle_resolver.module_resolution.lookup import join_path
from bundle_resolver.module_resolution.lookup import prefer_module_variant
from bundle_resolver.module_resolution.lookup import relative_path
from bundle_resolver.module_resolution.lookup import resolve_file
from bundle_resolver.module_resolution.lookup import resolve_in_root
from bundle_resolver.module_resolution.lookup import strip_declaration_suffix


class TestJoinPath:
    def test_absolute_segment_stays_under_prefix(self):
        assert join_path("/work", "bin", "/abs/file") == "/work/bin/abs/file"

    def test_collapses_parent_references(self):
        assert join_path("pkg", "../other") == "other"
        assert join_path("/work/bin/pkg/sub", "../util") == "/work/bin/pkg/util"

    def test_skips_empty_segments(self):
        assert join_path("/work", "", "bin", "") == "/work/bin"

    def test_normalizes_backslashes(self):
        assert join_path("pkg\\sub", "file") == "pkg/sub/file"

    def test_empty_is_current_directory(self):
        assert join_path("", "") == "."

    def test_keeps_trailing_slash(self):
        assert join_path("/work", "bin", "lib/util/") == "/work/bin/lib/util/"
        assert join_path("lib", "../util/") == "util/"
        assert join_path("/") == "/"


class TestRelativePath:
    def test_inside(self):
        assert relative_path("/work/bin/pkg", "/work", "bin") == "pkg"

    def test_same_directory_is_empty(self):
        assert relative_path("/work/bin", "/work", "/work/bin") == ""

    def test_relative_inputs_use_base_dir(self):
        assert relative_path("ws/pkg/util", "/work", "ws") == "pkg/util"
        assert relative_path("@scope/pkg", "/work", "ws") == "../@scope/pkg"

    def test_escapes_upward(self):
        assert escapes_upward("..")
        assert escapes_upward("../x")
        assert not escapes_upward("pkg/x")
        assert not escapes_upward("..hidden/x")
        assert not escapes_upward("")


def test_strip_declaration_suffix():
    assert strip_declaration_suffix("lib/index.d.ts") == "lib/index"
    assert strip_declaration_suffix("lib/index.ts") == "lib/index.ts"
    assert strip_declaration_suffix("lib") == "lib"


class TestResolveFile:
    def test_literal_file(self, tmp_path, touch):
        target = touch(tmp_path / "mod.js")
        assert resolve_file(target.as_posix()) == target.resolve().as_posix()

    def test_extension_order(self, tmp_path, touch):
        js = touch(tmp_path / "mod.js")
        touch(tmp_path / "mod.json", "{}")
        assert resolve_file((tmp_path / "mod").as_posix()) == js.resolve().as_posix()

    def test_json_extension(self, tmp_path, touch):
        data = touch(tmp_path / "data.json", "{}")
        assert resolve_file((tmp_path / "data").as_posix()) == data.resolve().as_posix()

    def test_directory_index(self, tmp_path, touch):
        index = touch(tmp_path / "pkg" / "index.js")
        assert resolve_file((tmp_path / "pkg").as_posix()) == index.resolve().as_posix()

    def test_package_main(self, tmp_path, touch):
        touch(tmp_path / "pkg" / "package.json", json.dumps({"main": "dist/entry"}))
        entry = touch(tmp_path / "pkg" / "dist" / "entry.js")
        touch(tmp_path / "pkg" / "index.js")
        assert resolve_file((tmp_path / "pkg").as_posix()) == entry.resolve().as_posix()

    def test_package_main_directory_index(self, tmp_path, touch):
        touch(tmp_path / "pkg" / "package.json", json.dumps({"main": "lib"}))
        index = touch(tmp_path / "pkg" / "lib" / "index.js")
        assert resolve_file((tmp_path / "pkg").as_posix()) == index.resolve().as_posix()

    def test_missing_main_falls_back_to_index(self, tmp_path, touch):
        touch(tmp_path / "pkg" / "package.json", json.dumps({"main": "missing.js"}))
        index = touch(tmp_path / "pkg" / "index.js")
        assert resolve_file((tmp_path / "pkg").as_posix()) == index.resolve().as_posix()

    def test_malformed_package_json_is_a_miss(self, tmp_path, touch):
        touch(tmp_path / "pkg" / "package.json", "{not json")
        touch(tmp_path / "pkg" / "index.js")
        assert resolve_file((tmp_path / "pkg").as_posix()) is None

    def test_trailing_slash_skips_file_probe(self, tmp_path, touch):
        touch(tmp_path / "util.js")
        assert resolve_file((tmp_path / "util").as_posix() + "/") is None

    def test_trailing_slash_directory_index(self, tmp_path, touch):
        touch(tmp_path / "util.js")
        index = touch(tmp_path / "util" / "index.js")
        assert resolve_file((tmp_path / "util").as_posix() + "/") == index.resolve().as_posix()

    def test_missing(self, tmp_path):
        assert resolve_file((tmp_path / "nothing").as_posix()) is None

    def test_directory_without_index(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert resolve_file((tmp_path / "empty").as_posix()) is None

    def test_symlink_resolved_to_real_path(self, tmp_path, touch):
        target = touch(tmp_path / "real" / "mod.js")
        link_dir = tmp_path / "linked"
        link_dir.symlink_to(tmp_path / "real", target_is_directory=True)
        assert resolve_file((link_dir / "mod").as_posix()) == target.resolve().as_posix()


def test_resolve_in_root(tmp_path, touch):
    target = touch(tmp_path / "bin" / "pkg" / "util.js")
    assert resolve_in_root("pkg/util", tmp_path.as_posix(), "bin") == target.resolve().as_posix()
    assert resolve_in_root("pkg/missing", tmp_path.as_posix(), "bin") is None
    assert resolve_in_root("pkg/util/", tmp_path.as_posix(), "bin") is None


class TestPreferModuleVariant:
    def test_prefers_mjs_sibling(self, tmp_path, touch):
        js = touch(tmp_path / "mod.js")
        mjs = touch(tmp_path / "mod.mjs")
        assert prefer_module_variant(js.as_posix()) == mjs.as_posix()

    def test_keeps_js_without_sibling(self, tmp_path, touch):
        js = touch(tmp_path / "mod.js")
        assert prefer_module_variant(js.as_posix()) == js.as_posix()

    def test_ignores_other_extensions(self, tmp_path, touch):
        data = touch(tmp_path / "mod.json")
        touch(tmp_path / "mod.mjs")
        assert prefer_module_variant(data.as_posix()) == data.as_posix()
