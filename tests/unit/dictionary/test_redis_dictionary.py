"""Test RedisDictionary behaviour against an in-process Redis."""

import fakeredis
import pytest
from pydantic import BaseModel

from remote_collections import (
    CollectionOptions,
    DuplicateKeyError,
    KeyNotFoundError,
    RedisDictionary,
    StringSerializer,
)
from remote_collections.errors import DecodeError, EncodeError


class Profile(BaseModel):
    name: str
    score: int


@pytest.fixture
def d(redis_client, options, key_builder):
    """Dictionary of str -> str."""
    return RedisDictionary(
        redis_client, "test", options=options, key_type=str, value_type=str, key_builder=key_builder
    )


def fill(d, n):
    for i in range(n):
        d.add(f"k{i}", f"v{i}")


# =================================================================
# Scenarios
# =================================================================


def test_add_set_remove_walkthrough(d):
    """Add, overwrite, remove, then indexed get fails."""
    d.add("k1", "v1")
    assert len(d) == 1
    assert d.try_get("k1") == (True, "v1")

    d["k1"] = "v2"
    assert d.try_get("k1") == (True, "v2")

    assert d.remove("k1") is True
    assert len(d) == 0
    with pytest.raises(KeyNotFoundError):
        d["k1"]


def test_double_add_raises_and_keeps_count(d):
    d.add("k1", "v1")
    with pytest.raises(DuplicateKeyError) as exc_info:
        d.add("k1", "v1")
    assert exc_info.value.key == "k1"
    assert len(d) == 1


def test_duplicate_add_leaves_entry_unchanged(d):
    d.add("k1", "v1")
    with pytest.raises(DuplicateKeyError):
        d.add("k1", "other")
    assert d["k1"] == "v1"


# =================================================================
# Reads
# =================================================================


def test_try_get_absent(d):
    assert d.try_get("missing") == (False, None)


def test_get_with_default(d):
    d["k"] = "v"
    assert d.get("k") == "v"
    assert d.get("missing") is None
    assert d.get("missing", "fallback") == "fallback"


def test_key_not_found_is_key_error(d):
    with pytest.raises(KeyError):
        d["missing"]


def test_empty_stored_value_counts_as_absent(redis_client, key_builder):
    """A raw empty field value is treated like a missing field."""
    d = RedisDictionary(
        redis_client,
        "raw",
        options=CollectionOptions(key_serializer=StringSerializer(), value_serializer=StringSerializer()),
        key_builder=key_builder,
    )
    redis_client.hset(d.redis_key, "k", "")
    assert d.try_get("k") == (False, None)


def test_contains_key(d):
    d["k"] = "v"
    assert "k" in d
    assert d.contains_key("k")
    assert "missing" not in d
    assert not d.contains_key("missing")


def test_contains_pair(d):
    d["k"] = "v"
    assert d.contains("k", "v")
    assert not d.contains("k", "other")
    assert not d.contains("missing", "v")


def test_items_view_membership(d):
    d["k"] = "v"
    assert ("k", "v") in d.items()
    assert ("k", "other") not in d.items()


def test_items_view_membership_rejects_non_pairs(d):
    d["k"] = "v"
    items = d.items()
    assert "k" not in items
    assert ("k",) not in items
    assert ("k", "v", "extra") not in items
    assert ["k", "v"] not in items


# =================================================================
# Removal
# =================================================================


def test_remove_absent_returns_false_and_leaves_contents(d):
    d["a"] = "1"
    assert d.remove("missing") is False
    assert len(d) == 1


def test_remove_present_then_not_contained(d):
    d["a"] = "1"
    assert d.remove("a") is True
    assert not d.contains_key("a")


def test_del_absent_raises(d):
    with pytest.raises(KeyNotFoundError):
        del d["missing"]


def test_del_present(d):
    d["a"] = "1"
    del d["a"]
    assert "a" not in d


def test_remove_item_only_when_value_matches(d):
    d["a"] = "1"
    assert d.remove_item("a", "2") is False
    assert d["a"] == "1"
    assert d.remove_item("a", "1") is True
    assert "a" not in d


def test_remove_item_absent(d):
    assert d.remove_item("missing", "1") is False


def test_clear(d):
    fill(d, 5)
    d.clear()
    assert len(d) == 0
    for i in range(5):
        assert d.try_get(f"k{i}") == (False, None)


def test_clear_deletes_redis_key(d, redis_client):
    d["a"] = "1"
    d.clear()
    assert redis_client.exists(d.redis_key) == 0


def test_pop(d):
    d["a"] = "1"
    assert d.pop("a") == "1"
    assert d.pop("a", "default") == "default"
    with pytest.raises(KeyError):
        d.pop("a")


# =================================================================
# Bulk reads and enumeration
# =================================================================


def test_count_matches_len(d):
    fill(d, 3)
    assert d.count() == len(d) == 3


def test_keys_and_values(d):
    fill(d, 4)
    assert sorted(d.keys()) == ["k0", "k1", "k2", "k3"]
    assert sorted(d.values()) == ["v0", "v1", "v2", "v3"]


def test_enumeration_yields_every_pair_once(d):
    fill(d, 25)
    pairs = list(d.items())
    assert len(pairs) == 25
    assert len(set(pairs)) == 25
    assert set(pairs) == {(f"k{i}", f"v{i}") for i in range(25)}


def test_enumeration_matches_keys_values_pairing(d):
    fill(d, 10)
    assert dict(d.items()) == {k: d[k] for k in d.keys()}


def test_enumeration_is_restartable(d):
    fill(d, 10)
    items = d.items()
    assert set(items) == set(items)
    assert len(items) == 10


def test_iter_yields_keys(d):
    fill(d, 3)
    assert sorted(d) == ["k0", "k1", "k2"]


def test_enumerate_empty(d):
    assert list(d.items()) == []
    assert list(d) == []


def test_copy_to(d):
    fill(d, 3)
    buffer = [None] * 5
    d.copy_to(buffer, 2)
    assert buffer[:2] == [None, None]
    assert sorted(buffer[2:]) == [("k0", "v0"), ("k1", "v1"), ("k2", "v2")]


def test_copy_to_short_buffer_raises(d):
    fill(d, 3)
    with pytest.raises(IndexError):
        d.copy_to([None] * 2)


def test_copy_to_negative_offset(d):
    with pytest.raises(ValueError):
        d.copy_to([None], -1)


# =================================================================
# Mapping extras
# =================================================================


def test_setdefault(d):
    assert d.setdefault("a", "1") == "1"
    assert d.setdefault("a", "2") == "1"
    assert d["a"] == "1"


def test_update_and_equality(d):
    d.update({"a": "1", "b": "2"})
    assert d == {"a": "1", "b": "2"}


def test_set_method(d):
    d.set("a", "1")
    d.set("a", "2")
    assert d["a"] == "2"
    assert len(d) == 1


# =================================================================
# Sharing, typing, configuration
# =================================================================


def test_same_name_shares_entries(redis_client, key_builder):
    first = RedisDictionary(redis_client, "shared", key_builder=key_builder)
    second = RedisDictionary(redis_client, "shared", key_builder=key_builder)
    first["x"] = 1
    assert second["x"] == 1


def test_different_names_are_isolated(redis_client, key_builder):
    first = RedisDictionary(redis_client, "one", key_builder=key_builder)
    second = RedisDictionary(redis_client, "two", key_builder=key_builder)
    first["x"] = 1
    assert "x" not in second


def test_dropping_adapter_keeps_data(redis_client, key_builder):
    d = RedisDictionary(redis_client, "persist", key_builder=key_builder)
    d["x"] = 1
    del d
    assert RedisDictionary(redis_client, "persist", key_builder=key_builder)["x"] == 1


def test_redis_key_and_repr(d):
    assert d.redis_key == "IDictionary+test"
    assert d.name == "test"
    assert repr(d) == "RedisDictionary(redis_key='IDictionary+test')"


def test_typed_keys_and_models(redis_client, key_builder):
    d = RedisDictionary(redis_client, "profiles", key_type=tuple[int, int], value_type=Profile, key_builder=key_builder)
    d.add((1, 2), Profile(name="alice", score=10))
    assert d[(1, 2)] == Profile(name="alice", score=10)
    assert d.keys() == [(1, 2)]
    assert dict(d.items()) == {(1, 2): Profile(name="alice", score=10)}


def test_structured_key_lookup_ignores_dict_order(redis_client, key_builder):
    d = RedisDictionary(redis_client, "dict-keys", value_type=int, key_builder=key_builder)
    d.set({"a": 1, "b": 2}, 5)
    assert d.try_get({"b": 2, "a": 1}) == (True, 5)
    assert len(d) == 1


def test_string_serializers_store_plain_text(redis_client, key_builder):
    options = CollectionOptions(key_serializer=StringSerializer(), value_serializer=StringSerializer())
    d = RedisDictionary(redis_client, "plain", options=options, key_builder=key_builder)
    d["greeting"] = "hello"
    assert redis_client.hget(d.redis_key, "greeting") == b"hello"


def test_wrong_value_type_surfaces_decode_error(redis_client, key_builder):
    writer = RedisDictionary(redis_client, "typed", value_type=str, key_builder=key_builder)
    reader = RedisDictionary(redis_client, "typed", value_type=Profile, key_builder=key_builder)
    writer["a"] = "not a profile"
    with pytest.raises(DecodeError):
        reader["a"]


def test_decode_responses_client(redis_server, key_builder):
    """Clients that decode replies to str work the same way."""
    client = fakeredis.FakeRedis(server=redis_server, decode_responses=True)
    d = RedisDictionary(client, "decoded", value_type=int, key_builder=key_builder)
    d.add("a", 1)
    assert d["a"] == 1
    assert dict(d.items()) == {"a": 1}


def test_distinct_keys_never_share_a_field(redis_client, key_builder):
    d = RedisDictionary(redis_client, "mapping-keys", value_type=int, key_builder=key_builder)
    d.add({"1": "a"}, 1)
    with pytest.raises(EncodeError):
        d.add({1: "a"}, 2)
    assert len(d) == 1
    assert d[{"1": "a"}] == 1


def test_non_finite_value_rejected_before_write(redis_client, key_builder):
    d = RedisDictionary(redis_client, "floats", value_type=float, key_builder=key_builder)
    with pytest.raises(EncodeError):
        d["x"] = float("inf")
    assert "x" not in d
    d["x"] = 1.5
    assert d["x"] == 1.5
