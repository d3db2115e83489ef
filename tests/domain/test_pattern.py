"""Tests for module pattern compilation and path rejection."""

import pytest

from workon.domain.pattern import check_pattern, compile_pattern, is_literal, is_relative_path


class TestCompilePattern:
    def test_literal_matches_itself_only(self) -> None:
        p = compile_pattern("example.com/foo")
        assert p.matches("example.com/foo")
        assert not p.matches("example.com/foobar")
        assert not p.matches("example.com/foo/bar")

    def test_match_is_anchored(self) -> None:
        p = compile_pattern("com/foo")
        assert not p.matches("example.com/foo")

    def test_dot_is_literal(self) -> None:
        p = compile_pattern("example.com/foo")
        assert not p.matches("exampleXcom/foo")

    def test_wildcard_spans_slashes(self) -> None:
        p = compile_pattern("example.com/.../cmd")
        assert p.matches("example.com/a/b/cmd")
        assert p.matches("example.com//cmd")
        assert not p.matches("example.com/a/b/cmd/x")

    def test_leading_wildcard(self) -> None:
        p = compile_pattern("...i3workon")
        assert p.matches("github.com/perillo/i3workon")
        assert p.matches("i3workon")
        assert not p.matches("github.com/perillo/i3workon/v2")

    def test_trailing_wildcard_matches_base(self) -> None:
        p = compile_pattern("example.com/tools/...")
        assert p.matches("example.com/tools")
        assert p.matches("example.com/tools/gen")
        assert p.matches("example.com/tools/gen/deep")
        assert not p.matches("example.com/toolsx")

    def test_inner_wildcard_without_slash(self) -> None:
        p = compile_pattern("example.com/tools...")
        assert p.matches("example.com/toolsx")
        assert p.matches("example.com/tools")

    def test_regex_metacharacters_are_escaped(self) -> None:
        p = compile_pattern("example.com/a+b(c)")
        assert p.matches("example.com/a+b(c)")
        assert not p.matches("example.com/aab(c)")

    def test_literal_flag(self) -> None:
        assert compile_pattern("example.com/foo").literal is True
        assert compile_pattern("example.com/...").literal is False

    def test_reusable(self) -> None:
        p = compile_pattern("example.com/...")
        assert [p.matches(s) for s in ("example.com/a", "other.org/a", "example.com/b")] == [
            True,
            False,
            True,
        ]


class TestIsLiteral:
    def test_no_wildcard(self) -> None:
        assert is_literal("a/b")

    def test_wildcard(self) -> None:
        assert not is_literal("a/...")


class TestCheckPattern:
    @pytest.mark.parametrize("pattern", [".", "..", "./foo", "../foo", "./..."])
    def test_relative_paths_rejected(self, pattern: str) -> None:
        assert is_relative_path(pattern)
        with pytest.raises(ValueError, match="relative path"):
            check_pattern(pattern)

    def test_absolute_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="absolute path"):
            check_pattern("/home/user/go/src/example.com/foo")

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            check_pattern("")

    @pytest.mark.parametrize("pattern", ["...", "...foo", "example.com/...", "foo"])
    def test_module_patterns_accepted(self, pattern: str) -> None:
        check_pattern(pattern)
