from itertools import product

import pytest

from tbgen.core.versions import compare_versions, normalize_version, version_sort_key

SAMPLE = [
    "60.0",
    "68.0",
    "78.0",
    "91.0",
    "91.0a1",
    "91.0b2",
    "91.1",
    "102.0",
    "4",
    "4.0.0",
    "1.0.0b1",
    "1.0.0.0",
    "91.*",
    "",
    "abc",
]


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("91.0a1", "91.0", -1),
        ("4", "4.0.0", 0),
        ("1.0.0", "1.0.0.0", 0),
        ("102.0", "91.0", 1),
        ("91.0", "91.0", 0),
        ("91.0b2", "91.0a1", 1),
        ("1.0.0b1", "1.0.0", -1),
        ("91.1a1", "91.1", -1),
        ("91.0alpha", "91.0beta", -1),
        ("91.0rc10", "91.0rc2", 1),
    ],
)
def test_compare_known_pairs(a, b, expected):
    assert compare_versions(a, b) == expected


@pytest.mark.parametrize("version", SAMPLE)
def test_wildcard_is_greatest(version):
    assert compare_versions(version, "*") == -1
    assert compare_versions("*", version) == 1


def test_wildcard_equals_wildcard():
    assert compare_versions("*", "*") == 0


@pytest.mark.parametrize("version", SAMPLE + ["*"])
def test_reflexive(version):
    assert compare_versions(version, version) == 0


def test_antisymmetric():
    for a, b in product(SAMPLE + ["*"], repeat=2):
        assert compare_versions(a, b) == -compare_versions(b, a), (a, b)


def test_transitive():
    values = SAMPLE + ["*"]
    for a, b, c in product(values, repeat=3):
        if compare_versions(a, b) <= 0 and compare_versions(b, c) <= 0:
            assert compare_versions(a, c) <= 0, (a, b, c)


def test_malformed_values_do_not_raise():
    assert compare_versions(None, "0") == 0
    assert compare_versions("", "0") == 0
    assert compare_versions("abc", "0") == -1
    assert compare_versions(91, "91.0") == 0


def test_normalize_splits_tags_into_segments():
    assert normalize_version("91.0a1") == [91, -65439, 1]
    assert normalize_version("1.0.0b1") == [1, -65438, 1]
    assert normalize_version("4.0.0") == [4, 0, 0]


def test_sort_key_orders_release_channels():
    versions = ["102.0", "*", "91.0", "91.0a1", "68.0", "91.0b2", "4"]
    assert sorted(versions, key=version_sort_key) == [
        "4",
        "68.0",
        "91.0a1",
        "91.0b2",
        "91.0",
        "102.0",
        "*",
    ]
