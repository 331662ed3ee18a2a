from paniq.replaycache import ReplayCache, replay_key


def _key(first):
    return bytes([first]) + bytes(31)


def test_replay_cache_seen():
    cache = ReplayCache(2)
    key1, key2, key3 = _key(1), _key(2), _key(3)

    replayed, _ = cache.seen(key1)
    assert replayed is False
    replayed, _ = cache.seen(key1)
    assert replayed is True
    replayed, _ = cache.seen(key2)
    assert replayed is False
    replayed, evicted = cache.seen(key3)
    assert replayed is False
    assert evicted > 0


def test_least_recent_is_evicted():
    cache = ReplayCache(2)
    cache.seen(_key(1))
    cache.seen(_key(2))
    cache.seen(_key(1))
    cache.seen(_key(3))
    assert _key(1) in cache
    assert _key(2) not in cache
    assert len(cache) == 2


def test_reset_forgets_keys():
    cache = ReplayCache(4)
    cache.seen(_key(1))
    cache.reset()
    assert len(cache) == 0
    assert cache.seen(_key(1)) == (False, 0)


def test_non_positive_capacity_uses_default():
    assert ReplayCache(0).capacity == ReplayCache().capacity


def test_replay_key_deterministic_and_sensitive():
    base = replay_key(1000, b"payload", b"")
    assert len(base) == 32
    assert replay_key(1000, b"payload", b"") == base
    assert replay_key(1001, b"payload", b"") != base
    assert replay_key(1000, b"payloae", b"") != base
    assert replay_key(1000, b"payload", bytes(16)) != base