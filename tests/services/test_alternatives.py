from tbgen.services.alternatives import Alternative, parse_alternative_data

DATA = """\
# Alternatives for unmaintained add-ons
u_id: old@example.com
r_name: New Add-on
r_link: https://addons.thunderbird.net/addon/new-addon/
---
u_id: old@example.com
r_name: Built-in feature
---
# comment only document
---
u_id: other@example.com
r_name: Other
"""


def test_parse_groups_by_guid_in_file_order():
    data = parse_alternative_data(DATA)
    assert list(data) == ["old@example.com", "other@example.com"]
    assert data["old@example.com"] == [
        Alternative("New Add-on", "https://addons.thunderbird.net/addon/new-addon/"),
        Alternative("Built-in feature", None),
    ]


def test_parse_empty_text():
    assert parse_alternative_data("") == {}


def test_parse_skips_documents_without_guid():
    assert parse_alternative_data("r_name: Orphan\n") == {}


def test_brace_guid_is_kept_verbatim():
    data = parse_alternative_data(
        "u_id: {3550f703-e582-4d05-9a08-453d09bdfdc6}\nr_name: Replacement\n"
    )
    assert data == {"{3550f703-e582-4d05-9a08-453d09bdfdc6}": [Alternative("Replacement")]}


def test_values_may_contain_colons_and_hashes():
    data = parse_alternative_data(
        "u_id: old@example.com\r\n"
        "r_name: Foo: the bar #1\r\n"
        "r_link: https://example.com/foo\r\n"
        "---\r\n"
        "u_id: old@example.com\r\n"
        "r_name: yes\r\n"
    )
    assert data["old@example.com"] == [
        Alternative("Foo: the bar #1", "https://example.com/foo"),
        Alternative("yes", None),
    ]


def test_lines_without_key_are_ignored():
    data = parse_alternative_data("u_id: a@b\n\n: orphan value\nnot a pair\nr_name: A\n")
    assert data == {"a@b": [Alternative("A")]}
