"""Tests for assetpress.orchestrator."""

from __future__ import annotations

from pathlib import Path

import rcssmin
import rjsmin
import pytest

from assetpress.config import InputConfig
from assetpress.manifest import ManifestNotFoundError
from assetpress.orchestrator import Orchestrator, RunSummary
from assetpress.walker import TreeWalker

A_JS = "function a() {\n    return 'a';\n}\n"
B_JS = "function b() {\n    return 'b';\n}\n"
X_CSS = ".x {\n    display: none;\n}\n"

UNRELATED = {
    "resources/js/app.js": {"file": "assets/app-1a2b.js", "src": "resources/js/app.js", "isEntry": True},
}


def test_merged_input_registers_bundle_under_source_directory(asset_tree) -> None:
    asset_tree.write({"src/js/a.js": A_JS, "src/js/b.js": B_JS})
    asset_tree.write_manifest(UNRELATED)

    summary = Orchestrator().run_inputs(
        asset_tree.root, [InputConfig(src="src/js", merge_result="app")]
    )

    bundle = asset_tree.path("public/build/assets/app.min.js")
    assert bundle.read_text(encoding="utf-8") == (
        f"/** src/js/a.js **/\n{rjsmin.jsmin(A_JS)}\n/** src/js/b.js **/\n{rjsmin.jsmin(B_JS)}"
    )
    manifest = asset_tree.read_manifest()
    assert manifest == {
        **UNRELATED,
        "src/js": {"file": "assets/app.min.js", "src": "src/js", "isEntry": True},
    }
    assert isinstance(summary, RunSummary)
    assert summary.processed == ["src/js"]
    assert summary.entries_written == 1


def test_merged_js_and_css_share_one_key_and_replacement_is_logged(asset_tree, caplog) -> None:
    asset_tree.write({"src/a.js": A_JS, "src/x.css": X_CSS})
    asset_tree.write_manifest()

    summary = Orchestrator().run_inputs(
        asset_tree.root, [InputConfig(src="src", merge_result="app")]
    )

    assert asset_tree.path("public/build/assets/app.min.js").exists()
    assert asset_tree.path("public/build/assets/app.min.css").exists()
    manifest = asset_tree.read_manifest()
    assert list(manifest) == ["src"]
    assert manifest["src"]["file"] == "assets/app.min.css"
    assert summary.entries_written == len(manifest) == 1
    assert "Manifest entry src already points at assets/app.min.js" in caplog.text


def test_unmerged_input_registers_each_file(asset_tree) -> None:
    asset_tree.write({"styles/x.css": X_CSS})
    asset_tree.write_manifest()

    Orchestrator().run_inputs(asset_tree.root, [InputConfig(src="styles")])

    written = asset_tree.path("public/build/assets/x.min.css")
    assert written.read_text(encoding="utf-8") == rcssmin.cssmin(X_CSS)
    assert asset_tree.read_manifest() == {
        "styles/x.css": {"file": "assets/x.min.css", "src": "styles/x.css", "isEntry": True},
    }


def test_rerun_overwrites_instead_of_duplicating(asset_tree) -> None:
    asset_tree.write({"src/a.js": A_JS, "src/b.js": B_JS})
    asset_tree.write_manifest(UNRELATED)
    inputs = [InputConfig(src="src")]

    Orchestrator().run_inputs(asset_tree.root, inputs)
    assert len(asset_tree.read_manifest()) == len(UNRELATED) + 2

    Orchestrator().run_inputs(asset_tree.root, inputs)
    assert len(asset_tree.read_manifest()) == len(UNRELATED) + 2


def test_missing_source_is_skipped_and_later_inputs_run(asset_tree, caplog) -> None:
    asset_tree.write({"styles/x.css": X_CSS})
    asset_tree.write_manifest()

    summary = Orchestrator().run_inputs(
        asset_tree.root,
        [InputConfig(src="does/not/exist"), InputConfig(src="styles")],
    )

    assert summary.skipped == ["does/not/exist"]
    assert summary.processed == ["styles"]
    assert list(asset_tree.read_manifest()) == ["styles/x.css"]
    assert "Source path does not exist or is inaccessible" in caplog.text


def test_missing_manifest_aborts_without_creating_it(asset_tree, caplog) -> None:
    asset_tree.write({"src/a.js": A_JS})

    with pytest.raises(ManifestNotFoundError):
        Orchestrator().run_inputs(asset_tree.root, [InputConfig(src="src")])

    assert not asset_tree.path("public/build/manifest.json").exists()
    assert not asset_tree.path("public/build/assets").exists()
    assert "Manifest not found" in caplog.text


def test_manifest_is_persisted_after_each_input(asset_tree, monkeypatch) -> None:
    asset_tree.write({"first/a.js": A_JS, "second/b.js": B_JS})
    asset_tree.write_manifest()
    original_walk = TreeWalker.walk
    calls: list[str] = []

    def flaky_walk(self, source, output, **kwargs):  # type: ignore[no-untyped-def]
        calls.append(source.name)
        if source.name == "second":
            raise RuntimeError("walker crashed")
        return original_walk(self, source, output, **kwargs)

    monkeypatch.setattr(TreeWalker, "walk", flaky_walk)

    with pytest.raises(RuntimeError):
        Orchestrator().run_inputs(
            asset_tree.root, [InputConfig(src="first"), InputConfig(src="second")]
        )

    assert calls == ["first", "second"]
    assert list(asset_tree.read_manifest()) == ["first/a.js"]


def test_custom_output_and_build_root(asset_tree) -> None:
    asset_tree.write({"assets/app.js": A_JS, "assets/img/logo.svg": "<svg/>"})
    asset_tree.write_manifest(relative="web/dist/manifest.json")

    Orchestrator().run_inputs(
        asset_tree.root,
        [InputConfig(src="assets", output="web/dist/static")],
        manifest_path="web/dist/manifest.json",
        build_root="web/dist",
    )

    manifest = asset_tree.read_manifest("web/dist/manifest.json")
    assert manifest["assets/app.js"]["file"] == "static/app.min.js"
    assert manifest["assets/img/logo.svg"]["file"] == "static/img/logo.svg"


def test_run_reads_project_config(asset_tree) -> None:
    asset_tree.write(
        {
            ".assetpress.yml": """
            manifest_path: build/manifest.json
            build_root: build
            input:
              - src: js
                output: build/js
                merge_result: true
            """,
            "js/a.js": A_JS,
        }
    )
    asset_tree.write_manifest(relative="build/manifest.json")

    summary = Orchestrator().run(asset_tree.root)

    assert summary.manifest_path == asset_tree.path("build/manifest.json")
    assert asset_tree.read_manifest("build/manifest.json") == {
        "js": {"file": "js/js.min.js", "src": "js", "isEntry": True},
    }


def test_no_inputs_logs_warning(asset_tree, caplog) -> None:
    asset_tree.write_manifest(UNRELATED)

    summary = Orchestrator().run_inputs(asset_tree.root, [])

    assert summary.entries_written == 0
    assert asset_tree.read_manifest() == UNRELATED
    assert "No inputs configured" in caplog.text


def test_minify_does_not_touch_manifest(asset_tree) -> None:
    asset_tree.write({"src/a.js": A_JS})
    manifest_path = asset_tree.write_manifest(UNRELATED)
    before = manifest_path.read_text(encoding="utf-8")

    result = Orchestrator().minify(asset_tree.root, InputConfig(src="src", output="out"))

    assert [p.output for p in result.written] == [asset_tree.path("out/a.min.js")]
    assert manifest_path.read_text(encoding="utf-8") == before


def test_minify_missing_source_raises(asset_tree) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().minify(asset_tree.root, InputConfig(src="nope"))


def test_unlistable_source_is_skipped_and_later_inputs_run(asset_tree, monkeypatch, caplog) -> None:
    asset_tree.write({"locked/a.js": A_JS, "styles/x.css": X_CSS})
    asset_tree.write_manifest()
    original_iterdir = Path.iterdir

    def guarded_iterdir(self):  # type: ignore[no-untyped-def]
        if self.name == "locked":
            raise PermissionError(f"cannot list {self}")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", guarded_iterdir)

    summary = Orchestrator().run_inputs(
        asset_tree.root,
        [InputConfig(src="locked"), InputConfig(src="styles")],
    )

    assert summary.skipped == ["locked"]
    assert summary.processed == ["styles"]
    assert list(asset_tree.read_manifest()) == ["styles/x.css"]
    assert "cannot list" in caplog.text
