# File: tests/test_storage.py
import pytest

from policy_scout.storage import GENERIC_KEY, FilePolicyStore, cache_key


@pytest.mark.parametrize(
    "url,key",
    [
        ("https://www.example.com", "privacy_policy_www_example_com.txt"),
        ("https://www.example.com/about?x=1", "privacy_policy_www_example_com.txt"),
        ("http://Shop.Example.co.uk:8080/", "privacy_policy_shop_example_co_uk.txt"),
        ("not a url", GENERIC_KEY),
    ],
)
def test_cache_key(url, key):
    assert cache_key(url) == key


def test_put_then_get(tmp_path):
    store = FilePolicyStore(tmp_path / "cache")
    key = cache_key("https://example.com")

    assert store.get_cached(key) is None
    store.put(key, "Policy summary")

    assert store.get_cached(key) == "Policy summary"
    assert (tmp_path / "cache" / "privacy_policy_example_com.txt").is_file()


def test_put_overwrites(tmp_path):
    store = FilePolicyStore(tmp_path)
    store.put("k.txt", "old")
    store.put("k.txt", "new")
    assert store.get_cached("k.txt") == "new"
    assert not list(tmp_path.glob("*.tmp"))


def test_empty_file_is_a_miss(tmp_path):
    (tmp_path / "k.txt").write_text("", encoding="utf-8")
    assert FilePolicyStore(tmp_path).get_cached("k.txt") is None


@pytest.mark.parametrize("key", ["", "../escape.txt", "sub/dir.txt"])
def test_rejects_path_like_keys(tmp_path, key):
    with pytest.raises(ValueError):
        FilePolicyStore(tmp_path).put(key, "x")
