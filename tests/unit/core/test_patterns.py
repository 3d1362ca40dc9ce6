import pytest
from structlog.testing import capture_logs

from reviewflow.core.utils.patterns import compile_glob, expand_braces, matches_glob


class TestMatchesGlob:
    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("README.md", "*.md"),
            ("src/app.py", "src/*.py"),
            ("src/app.py", "**/*.py"),
            ("app.py", "**/*.py"),
            ("src/deep/nested/app.py", "src/**/*.py"),
            ("src/app.py", "src/**/*.py"),
            ("docs/guide/index.md", "docs/**"),
            ("a1.txt", "a?.txt"),
            ("log-b.txt", "log-[abc].txt"),
            ("log-z.txt", "log-[!abc].txt"),
            ("src/index.ts", "src/*.{js,ts}"),
            ("lib/util.jsx", "{src,lib}/*.{js,{j,t}sx}"),
        ],
    )
    def test_matches(self, path: str, pattern: str) -> None:
        assert matches_glob(path, pattern)

    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("docs/README.md", "*.md"),
            ("src/deep/app.py", "src/*.py"),
            ("ab1.txt", "a?.txt"),
            ("a/.txt", "a?.txt"),
            ("log-a.txt", "log-[!abc].txt"),
            ("log-d.txt", "log-[abc].txt"),
            ("src/index.css", "src/*.{js,ts}"),
            ("other/app.py", "src/**/*.py"),
        ],
    )
    def test_does_not_match(self, path: str, pattern: str) -> None:
        assert not matches_glob(path, pattern)

    def test_leading_dot_is_not_special(self) -> None:
        assert matches_glob(".eslintrc.md", "*.md")
        assert matches_glob("config/.env", "config/?env")

    def test_backslashes_are_normalised(self) -> None:
        assert matches_glob("src\\app.py", "src/*.py")
        assert matches_glob("src/app.py", "src\\*.py")

    def test_empty_inputs(self) -> None:
        assert not matches_glob("", "*.md")
        assert not matches_glob("README.md", "")

    def test_unclosed_bracket_is_literal(self) -> None:
        assert matches_glob("a[b", "a[b")

    def test_invalid_class_never_matches(self) -> None:
        with capture_logs() as logs:
            assert not matches_glob("log-b.txt", "log-[z-a].txt")
            assert not matches_glob("log-[z-a].txt", "log-[z-a].txt")

        assert any(entry["event"] == "invalid_glob_pattern" for entry in logs)

    def test_invalid_pattern_is_cached(self) -> None:
        assert compile_glob("data-[9-0].csv") is compile_glob("data-[9-0].csv")
        assert compile_glob("data-[9-0].csv").match("data-5.csv") is None


class TestExpandBraces:
    def test_no_braces(self) -> None:
        assert expand_braces("src/*.py") == ["src/*.py"]

    def test_simple_alternatives_keep_order(self) -> None:
        assert expand_braces("*.{js,ts}") == ["*.js", "*.ts"]

    def test_nested_alternatives(self) -> None:
        assert expand_braces("{a,b{c,d}}") == ["a", "bc", "bd"]

    def test_multiple_groups(self) -> None:
        assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]

    def test_duplicates_removed(self) -> None:
        assert expand_braces("{a,a}") == ["a"]

    def test_without_comma_kept_literally(self) -> None:
        assert expand_braces("{a}.txt") == ["{a}.txt"]

    def test_unclosed_kept_literally(self) -> None:
        assert expand_braces("{a,b") == ["{a,b"]

