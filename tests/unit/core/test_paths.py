import pytest

from qcos.core.utils.paths import dir_name, escape_path, resource_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("", ""),
        ("/", ""),
        ("newdir", "newdir"),
        ("/a/b/", "a/b"),
        ("//a//", "a"),
        ("a b", "a+b"),
        ("a~b", "a~b"),
        ("a+b", "a%2Bb"),
        ("a?b&c=d#e", "a%3Fb%26c%3Dd%23e"),
        ("中文", "%E4%B8%AD%E6%96%87"),
        ("x%2Fy", "x%252Fy"),
    ],
)
def test_escape_path(name, expected):
    assert escape_path(name) == expected


@pytest.mark.parametrize(
    "name",
    ["a/b", "~user/dir~", "a%2Fb/c%7e", "/é/ü~/ ", "a/../b", "?/#/%/~"],
)
def test_escape_path_keeps_slash_and_tilde_literal(name):
    escaped = escape_path(name)
    for encoded in ("%2F", "%2f", "%7E", "%7e"):
        assert encoded not in escaped.replace("%25", "")
    assert escaped == escaped.strip("/")
    assert escape_path(escaped) == escaped.replace("%", "%25").replace("+", "%2B")


def test_dir_name_trailing_slash():
    assert dir_name("") == ""
    assert dir_name("///") == ""
    assert dir_name("a") == "a/"
    assert dir_name("/a/b/") == "a/b/"


def test_resource_path():
    assert resource_path("200001", "newbucket", "") == "/200001/newbucket/"
    path = resource_path("200001", "newbucket", "a/b.txt")
    assert path == "/200001/newbucket/a/b.txt"
