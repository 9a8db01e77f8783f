"""Tests for pipeline.py."""

from unittest.mock import patch

import pytest

from i18n_scout.pipeline import ScanOptions, ScanReport, find_strings_to_translate
from i18n_scout.traversal import EntryPointError


@pytest.fixture
def platform_app(make_repo):
    return make_repo({
        "A.js": 'import B from "./B";\nexport default () => t("From A");\n',
        "B.ios.js": 'import C from "./C";\nexport default () => t("From iOS");\n',
        "B.js": 'export default () => t("From default");\n',
        "C.js": 'import "./styles.css";\nexport default () => i18n.t("From C");\n',
        "styles.css": "body {}",
        "Unused.js": 't("Never shipped");',
    })


class TestEndToEnd:
    def test_platform_variants_are_reachable(self, platform_app):
        options = ScanOptions(
            entry_points=["A.js"],
            root_dir=".",
            platforms=["ios"],
            extensions=["js"],
            extractor_function_name="t",
            cwd=str(platform_app),
        )
        report = find_strings_to_translate(options)
        root = platform_app
        assert set(report.reachable_files) == {
            str(root / "A.js"), str(root / "B.ios.js"), str(root / "B.js"), str(root / "C.js"),
        }
        assert report.reachable_file_count == 4
        assert report.error_files == []
        assert report.strings_found == ["From A", "From iOS", "From default", "From C"]
        assert "Never shipped" not in report.unique_strings

    def test_spec_scenario(self, make_repo):
        root = make_repo({"A.js": 'import "./B";', "B.ios.js": "", "B.js": ""})
        options = ScanOptions(
            entry_points=[str(root / "A.js")], root_dir=str(root), platforms=["ios"], extensions=["js"],
        )
        report = find_strings_to_translate(options)
        assert set(report.reachable_files) == {str(root / "A.js"), str(root / "B.ios.js"), str(root / "B.js")}

    def test_without_platforms_only_bare_variant(self, platform_app):
        options = ScanOptions(entry_points=["A.js"], root_dir=".", extensions=["js"], cwd=str(platform_app))
        report = find_strings_to_translate(options)
        assert set(report.reachable_files) == {str(platform_app / "A.js"), str(platform_app / "B.js")}

    def test_parse_errors_reported(self, make_repo):
        root = make_repo({
            "index.js": 'import "./ok";\nimport "./broken";\n',
            "ok.js": 't("Fine");',
            "broken.js": "const = ;",
        })
        report = find_strings_to_translate(
            ScanOptions(entry_points=["index.js"], root_dir=".", extensions=["js"], cwd=str(root)),
        )
        assert report.error_files == [str(root / "broken.js")]
        assert report.strings_found == ["Fine"]

    def test_unresolved_imports_reported(self, make_repo):
        root = make_repo({"index.js": 'import "./gone";\nimport "react";\n'})
        report = find_strings_to_translate(
            ScanOptions(entry_points=["index.js"], root_dir=".", extensions=["js"], cwd=str(root)),
        )
        assert sorted(r.specifier for r in report.unresolved) == ["./gone", "react"]

    def test_commented_tsconfig(self, make_repo):
        root = make_repo({
            "index.js": 't("Hello");',
            "tsconfig.json": '{\n // generated by tsc --init\n "compilerOptions": {"strict": true,},\n}\n',
        })
        report = find_strings_to_translate(
            ScanOptions(entry_points=["index.js"], root_dir=".", extensions=["js"], cwd=str(root)),
        )
        assert report.strings_found == ["Hello"]

    def test_tsconfig_base_url_used(self, make_repo):
        root = make_repo({
            "tsconfig.json": '{\n  /* paths */\n  "compilerOptions": {"baseUrl": "src",},\n}',
            "src/App.ts": 'import { label } from "strings/labels";\nt("App");\n',
            "src/strings/labels.ts": 'export const label = t("Label");\n',
        })
        report = find_strings_to_translate(
            ScanOptions(entry_points=["src/App.ts"], root_dir=".", extensions=["ts"], cwd=str(root)),
        )
        assert report.strings_found == ["App", "Label"]
        assert report.unresolved == []

    def test_max_file_size(self, make_repo):
        root = make_repo({
            "index.js": 'import "./big";\nt("Small");\n',
            "big.js": "t(\"Big\");\n" + "// padding\n" * 100,
        })
        report = find_strings_to_translate(ScanOptions(
            entry_points=["index.js"], root_dir=".", extensions=["js"], max_file_size=200, cwd=str(root),
        ))
        big = str(root / "big.js")
        assert report.reachable_files == [str(root / "index.js"), big]
        assert report.error_files == [big]
        assert report.failures[big].startswith("skipped")
        assert report.strings_found == ["Small"]

    def test_callbacks(self, platform_app):
        counts, done = [], []
        find_strings_to_translate(
            ScanOptions(entry_points=["A.js"], root_dir=".", extensions=["js"], cwd=str(platform_app)),
            on_files_found=counts.append,
            on_progress=done.append,
        )
        assert counts == [2]
        assert len(done) == 2


class TestFatalEntryPoint:
    def test_missing_entry_point_aborts_before_extraction(self, platform_app):
        options = ScanOptions(entry_points=["A.js", "Nope.js"], root_dir=".", cwd=str(platform_app))
        with patch("i18n_scout.pipeline.extract_strings") as mock_extract:
            with pytest.raises(EntryPointError, match="Nope.js"):
                find_strings_to_translate(options)
        mock_extract.assert_not_called()

    def test_malformed_tsconfig_aborts_before_extraction(self, platform_app):
        (platform_app / "tsconfig.json").write_text("{oops")
        options = ScanOptions(entry_points=["A.js"], root_dir=".", cwd=str(platform_app))
        with patch("i18n_scout.pipeline.extract_strings") as mock_extract:
            with pytest.raises(ValueError):
                find_strings_to_translate(options)
        mock_extract.assert_not_called()

    def test_unrecognized_extension_entry_point(self, platform_app):
        options = ScanOptions(entry_points=["styles.css"], root_dir=".", cwd=str(platform_app))
        with pytest.raises(EntryPointError):
            find_strings_to_translate(options)

    def test_entry_point_outside_root(self, make_repo):
        root = make_repo({"app/index.js": "", "other/main.js": ""})
        options = ScanOptions(entry_points=["other/main.js"], root_dir="app", cwd=str(root))
        with pytest.raises(EntryPointError):
            find_strings_to_translate(options)


class TestScanOptions:
    def test_extensions_normalized(self):
        options = ScanOptions(entry_points=["a.js"], root_dir=".", extensions=[".js", "tsx"])
        assert options.extensions == ["js", "tsx"]

    @pytest.mark.parametrize("kwargs", [
        {"entry_points": []},
        {"root_dir": ""},
        {"extensions": []},
        {"extensions": ["."]},
        {"platforms": [""]},
        {"extractor_function_name": ""},
        {"max_workers": 0},
        {"max_file_size": 0},
    ])
    def test_invalid(self, kwargs):
        base = {"entry_points": ["a.js"], "root_dir": "."}
        with pytest.raises(ValueError):
            ScanOptions(**{**base, **kwargs})

    def test_defaults(self):
        options = ScanOptions(entry_points=["a.js"], root_dir=".")
        assert options.extensions == ["js", "jsx", "ts", "tsx"]
        assert options.platforms == []
        assert options.extractor_function_name == "t"


class TestScanReport:
    def test_unique_strings(self):
        report = ScanReport(reachable_files=[], error_files=[], strings_found=["Hello", "Hi", "Hello"])
        assert report.unique_strings == {"Hello", "Hi"}
