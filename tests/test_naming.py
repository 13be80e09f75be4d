from create_package.naming import derive_name, repo_slug


def test_prefix_becomes_scope() -> None:
    assert derive_name("/x/delucis-my-tool", ["delucis"]) == "@delucis/my-tool"


def test_no_prefix_match_keeps_segment() -> None:
    assert derive_name("/x/my-tool", ["delucis"]) == "my-tool"


def test_any_of_several_prefixes() -> None:
    assert derive_name("/work/acme-widget", ["delucis", "acme"]) == "@acme/widget"


def test_prefix_needs_separator() -> None:
    assert derive_name("/x/delucistool", ["delucis"]) == "delucistool"


def test_no_prefixes() -> None:
    assert derive_name("/x/delucis-my-tool") == "delucis-my-tool"


def test_prefix_is_matched_literally() -> None:
    assert derive_name("/x/aXb-tool", ["a.b"]) == "aXb-tool"
    assert derive_name("/x/a.b-tool", ["a.b"]) == "@a.b/tool"


def test_slug_collapses_non_word_runs() -> None:
    assert repo_slug("My Cool! Tool") == "My-Cool-Tool"


def test_slug_strips_scope_punctuation() -> None:
    assert repo_slug("@delucis/my-tool") == "delucis-my-tool"


def test_slug_no_doubled_hyphens() -> None:
    assert repo_slug("--a -- b--") == "a-b"


def test_slug_is_ascii_only() -> None:
    assert repo_slug("tööl") == "t-l"
    assert repo_slug("café widget") == "caf-widget"
