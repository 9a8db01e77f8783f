"""Tests for indexer/module_map.py."""

from unittest.mock import MagicMock

from i18n_scout.indexer.module_map import ModuleMap
from i18n_scout.parsers.base import ExtractedImport


class TestBuild:
    def test_indexes_recognized_files(self, make_repo):
        root = make_repo({"index.js": "", "Foo.ios.js": "", "styles.css": ""})
        mm = ModuleMap.build(root, ["js"])
        assert len(mm) == 2
        assert mm.exists(str(root / "index.js"))
        assert mm.exists(str(root / "Foo.ios.js"))
        assert not mm.exists(str(root / "styles.css"))

    def test_contains_and_files(self, make_repo):
        root = make_repo({"b.js": "", "a.js": ""})
        mm = ModuleMap.build(root, ["js"])
        assert str(root / "a.js") in mm
        assert mm.files == [str(root / "a.js"), str(root / "b.js")]

    def test_exists_normalizes_paths(self, make_repo):
        root = make_repo({"src/a.js": ""})
        mm = ModuleMap.build(root, ["js"])
        assert mm.exists(f"{root}/src/../src/./a.js")


class TestDependencies:
    def test_deduplicated_in_source_order(self, make_repo):
        root = make_repo({
            "index.js": 'import "./b";\nimport a from "./a";\nconst b = require("./b");\n',
        })
        mm = ModuleMap.build(root, ["js"])
        assert mm.get_dependencies(str(root / "index.js")) == ["./b", "./a"]

    def test_imports_keep_first_occurrence(self, make_repo):
        root = make_repo({
            "index.js": 'import "./b";\nexport * from "./a";\nconst b = require("./b");\n',
        })
        mm = ModuleMap.build(root, ["js"])
        imports = mm.get_imports(str(root / "index.js"))
        assert [(imp.module, imp.kind, imp.line) for imp in imports] == [
            ("./b", "import", 1),
            ("./a", "export", 2),
        ]

    def test_outside_index_has_none(self, make_repo):
        root = make_repo({"node_modules/lib/index.js": 'require("./other");', "app.js": ""})
        mm = ModuleMap.build(root, ["js"])
        assert mm.get_dependencies(str(root / "node_modules" / "lib" / "index.js")) == []

    def test_parsed_once(self, repo):
        (repo / "a.js").write_text("")
        parser = MagicMock()
        parser.extract_imports.return_value = [ExtractedImport(module="./b", kind="import", line=1)]
        mm = ModuleMap(repo, [str(repo / "a.js")], parser=parser)
        assert mm.get_dependencies(str(repo / "a.js")) == ["./b"]
        assert mm.get_dependencies(str(repo / "a.js")) == ["./b"]
        assert parser.extract_imports.call_count == 1

    def test_unreadable_file_has_none(self, repo):
        mm = ModuleMap(repo, [str(repo / "gone.js")])
        assert mm.get_dependencies(str(repo / "gone.js")) == []


class TestFilesystemProbes:
    def test_is_file_outside_index(self, make_repo):
        root = make_repo({"node_modules/lib/index.js": "", "app.js": ""})
        mm = ModuleMap.build(root, ["js"])
        assert mm.is_file(str(root / "node_modules" / "lib" / "index.js"))
        assert mm.is_dir(str(root / "node_modules" / "lib"))
        assert not mm.is_file(str(root / "node_modules" / "lib"))

    def test_missing_path(self, repo):
        mm = ModuleMap(repo, [])
        assert not mm.is_file(str(repo / "nope.js"))
        assert not mm.is_dir(str(repo / "nope"))

    def test_indexed_file_needs_no_disk(self, repo):
        mm = ModuleMap(repo, [str(repo / "virtual.js")])
        assert mm.is_file(str(repo / "virtual.js"))
