"""
Tests for tree-sitter based import extraction.

Run with:
    pytest tests/parsing/test_import_extraction.py -v
"""

import pytest

from pkg_uninstaller.errors import ParseError
from pkg_uninstaller.parsing import ImportExtractor, NodeKind, StrategyFactory


@pytest.fixture(scope="module")
def factory():
    return StrategyFactory()


def specifiers(factory, extension, content):
    strategy = factory.get_strategy(extension)
    return [ref.specifier for ref in strategy.extract_imports(f"src/file{extension}", content)]


class TestJavaScript:
    def test_static_imports(self, factory):
        content = (
            'import React from "react";\n'
            "import { map } from 'lodash/fp';\n"
            'import "./styles.css";\n'
            'import * as utils from "@scope/utils";\n'
        )
        assert specifiers(factory, ".js", content) == ["react", "lodash/fp", "./styles.css", "@scope/utils"]

    def test_require_with_literal_argument(self, factory):
        content = 'const leftPad = require("left-pad/utils");\n'
        assert specifiers(factory, ".cjs", content) == ["left-pad/utils"]

    def test_dynamic_specifiers_are_ignored(self, factory):
        content = (
            "const name = 'chalk';\n"
            "const a = require(name);\n"
            "const b = require(`left-pad`);\n"
            "const c = require('a', 'b');\n"
            "const d = loader.require('lodash');\n"
            "import('react-dom');\n"
        )
        assert specifiers(factory, ".js", content) == []

    def test_re_exports_are_not_tracked(self, factory):
        content = 'export { default } from "react";\nexport * from "lodash";\n'
        assert specifiers(factory, ".mjs", content) == []

    def test_jsx_is_supported(self, factory):
        content = 'import React from "react";\nconst el = <div className="x">{1}</div>;\n'
        assert specifiers(factory, ".jsx", content) == ["react"]

    def test_reference_carries_line_and_file(self, factory):
        strategy = factory.get_strategy(".js")
        refs = strategy.extract_imports("src/app.js", '\n\nconst x = require("left-pad");\n')
        assert refs[0].line == 3
        assert refs[0].file_path == "src/app.js"

    def test_syntax_error_raises_parse_error(self, factory):
        strategy = factory.get_strategy(".js")
        with pytest.raises(ParseError) as excinfo:
            strategy.extract_imports("src/broken.js", 'import a from "a";\nconst = ;\n')
        assert excinfo.value.file_path == "src/broken.js"
        assert excinfo.value.line == 2


class TestTypeScript:
    def test_type_annotations_and_type_imports(self, factory):
        content = (
            'import type { Request } from "express";\n'
            'import { z } from "zod";\n'
            "const parse = (input: unknown): string => z.string().parse(input);\n"
        )
        assert specifiers(factory, ".ts", content) == ["express", "zod"]

    def test_import_equals_require(self, factory):
        content = 'import fs = require("fs-extra");\n'
        assert specifiers(factory, ".ts", content) == ["fs-extra"]

    def test_tsx_grammar(self, factory):
        content = (
            'import { Button } from "@mui/material";\n'
            "export const App = (props: { label: string }) => <Button>{props.label}</Button>;\n"
        )
        assert specifiers(factory, ".tsx", content) == ["@mui/material"]


class TestMarkup:
    def test_vue_script_blocks(self, factory):
        content = (
            "<template><div>{{ msg }}</div></template>\n"
            '<script lang="ts">\n'
            'import { defineComponent } from "vue";\n'
            "</script>\n"
            "<script setup>\n"
            "const dayjs = require('dayjs');\n"
            "</script>\n"
        )
        strategy = factory.get_strategy(".vue")
        refs = strategy.extract_imports("src/App.vue", content)
        assert [(ref.specifier, ref.line) for ref in refs] == [("vue", 3), ("dayjs", 6)]

    def test_svelte_without_script(self, factory):
        assert specifiers(factory, ".svelte", "<h1>Hello</h1>\n") == []

    def test_svelte_typescript_script(self, factory):
        content = (
            '<script lang="ts">\n'
            'import { writable } from "svelte/store";\n'
            "const count: number = 0;\n"
            "</script>\n"
            "<h1>{count}</h1>\n"
        )
        assert specifiers(factory, ".svelte", content) == ["svelte/store"]

    def test_quoted_angle_bracket_in_script_attribute(self, factory):
        content = (
            '<script setup lang="ts" generic="T extends Record<string, number>">\n'
            'import { ref } from "vue";\n'
            "</script>\n"
        )
        assert specifiers(factory, ".vue", content) == ["vue"]

    def test_syntax_error_line_is_relative_to_file(self, factory):
        content = (
            "<template>\n"
            "  <p>hi</p>\n"
            "</template>\n"
            "<script>\n"
            'import a from "a";\n'
            "const = ;\n"
            "</script>\n"
        )
        strategy = factory.get_strategy(".vue")
        with pytest.raises(ParseError) as excinfo:
            strategy.extract_imports("src/a.vue", content)
        assert excinfo.value.line == 6


class TestWalk:
    def test_walk_yields_tagged_variants(self, factory):
        strategy = factory.get_strategy(".js")
        tree = strategy.parse("a.js", b'import a from "a";\nrequire("b");\n')
        kinds = [kind for kind, _ in strategy.walk(tree.root_node)]
        assert NodeKind.IMPORT_DECLARATION in kinds
        assert NodeKind.CALL_EXPRESSION in kinds
        assert NodeKind.STRING_LITERAL in kinds
        assert NodeKind.OTHER not in kinds


class TestImportExtractor:
    def test_broken_file_is_skipped_and_recorded(self, tmp_path):
        good = tmp_path / "good.js"
        good.write_text('import "react";\n')
        broken = tmp_path / "broken.js"
        broken.write_text('import "lodash";\nfunction (\n')

        extractor = ImportExtractor()
        refs = list(extractor.extract_all([broken, good]))

        assert [ref.specifier for ref in refs] == ["react"]
        assert len(extractor.diagnostics) == 1
        assert extractor.diagnostics[0].file_path == str(broken)

    def test_broken_markup_script_is_recorded(self, tmp_path):
        broken = tmp_path / "Broken.svelte"
        broken.write_text('<h1>title</h1>\n<script lang="ts">\nlet x: = 1;\n</script>\n')

        extractor = ImportExtractor()
        refs = list(extractor.extract_all([broken]))

        assert refs == []
        assert len(extractor.diagnostics) == 1
        error = extractor.diagnostics[0]
        assert error.file_path == str(broken)
        assert error.line == 3
        assert str(error).startswith(f"{broken}:3:")

    def test_undecodable_file_is_a_parse_error(self, tmp_path):
        binary = tmp_path / "blob.js"
        binary.write_bytes(b"\xff\xfe\x00import")

        with pytest.raises(ParseError):
            ImportExtractor().extract_file(binary)
