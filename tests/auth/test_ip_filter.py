import pytest

from core.auth.ip_filter import is_allowed, matches_filter


@pytest.mark.parametrize("address", ["127.0.0.1", "::1", "10.20.30.40", "not-an-ip", ""])
def test_empty_filter_list_allows_everything(address: str):
    assert is_allowed(address, [])
    assert is_allowed(address, ())


@pytest.mark.parametrize("address", ["8.8.8.8", "", "fe80::1"])
def test_star_matches_any_address(address: str):
    assert matches_filter(address, "*")


def test_prefix_filter():
    assert matches_filter("192.168.0.5", "192.168.0.*")
    assert not matches_filter("192.168.1.5", "192.168.0.*")


def test_prefix_is_plain_string_prefix():
    # "192.168.0.*" also accepts 192.168.0.100 and any longer string
    assert matches_filter("192.168.0.100", "192.168.0.*")
    assert matches_filter("192.168.0.", "192.168.0.*")
    assert not matches_filter("192.168.0", "192.168.0.*")


def test_exact_match():
    assert matches_filter("::1", "::1")
    assert matches_filter("127.0.0.1", "127.0.0.1")
    assert not matches_filter("127.0.0.10", "127.0.0.1")


def test_only_first_star_is_used():
    # text after the first "*" is never compared
    assert matches_filter("10.1.2.3", "10.*.9.9")
    assert matches_filter("10.1.2.3", "10.*.*")
    assert not matches_filter("11.1.2.3", "10.*.9.9")


def test_leading_star_pattern_matches_everything():
    assert matches_filter("anything", "*.example")


def test_non_matching_list_denies():
    filters = ["127.0.0.1", "::1", "192.168.0.*"]
    assert not is_allowed("8.8.8.8", filters)
    assert is_allowed("192.168.0.42", filters)
    assert is_allowed("::1", filters)
