"""Tests covering source discovery and exclusion rules."""

import pytest

from pkg_uninstaller.errors import PreconditionError
from pkg_uninstaller.scanning import SourceScanner


def relative_names(root, files):
    return [path.relative_to(root.resolve()).as_posix() for path in files]


def test_scanner_skips_excluded_directories(make_project):
    root = make_project({}, files={
        "src/app.js": "",
        "src/view.vue": "",
        "src/types.d.ts": "",
        "src/styles.css": "",
        "node_modules/pkg/index.js": "",
        "dist/app.js": "",
        "build/app.js": "",
        "coverage/lcov.js": "",
        ".cache/tmp.js": "",
        "public/vendor.min.js": "",
    })

    files = SourceScanner(str(root)).scan()

    assert relative_names(root, files) == ["src/app.js", "src/types.d.ts", "src/view.vue"]


def test_scanner_includes_tool_config_dotfiles(make_project):
    root = make_project({}, files={
        ".storybook/preview.ts": "",
        ".vitepress/theme/index.ts": "",
        ".eslintrc.cjs": "",
        ".git/hooks/pre-commit.js": "",
        ".vscode/settings.js": "",
    })

    files = SourceScanner(str(root)).scan()

    assert relative_names(root, files) == [
        ".eslintrc.cjs", ".storybook/preview.ts", ".vitepress/theme/index.ts",
    ]


def test_scanner_honors_gitignore(make_project):
    root = make_project({}, files={
        ".gitignore": "generated/\n*.gen.ts\n",
        "generated/client.ts": "",
        "src/api.gen.ts": "",
        "src/api.ts": "",
    })

    assert relative_names(root, SourceScanner(str(root)).scan()) == ["src/api.ts"]
    assert relative_names(root, SourceScanner(str(root), respect_gitignore=False).scan()) == [
        "generated/client.ts", "src/api.gen.ts", "src/api.ts",
    ]


def test_additional_excludes(make_project):
    root = make_project({}, files={"scripts/release.js": "", "index.mjs": ""})

    files = SourceScanner(str(root), additional_excludes=["scripts"]).scan()

    assert relative_names(root, files) == ["index.mjs"]


def test_scanner_requires_root_manifest(tmp_path):
    (tmp_path / "index.js").write_text("")

    with pytest.raises(PreconditionError):
        SourceScanner(str(tmp_path)).scan()
