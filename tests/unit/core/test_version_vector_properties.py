"""Property tests for VersionVector append/merge/compare.

Vectors are generated the way a replication layer produces them: a chain of
appends from an empty vector, optionally joined with a second chain.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from vclock.core.version import Occurred
from vclock.core.version_vector import VersionVector

REPLICAS = ["n1", "n2", "n3", "n4"]


def _build(keys: list[str]) -> VersionVector[str]:
    vector = VersionVector.create()
    for key in keys:
        vector = vector.append(key)
    return vector


def _counts(vector: VersionVector) -> dict:
    return {key: counter.value for key, counter in vector.items()}


replicas = st.sampled_from(REPLICAS)
chains = st.lists(replicas, max_size=12).map(_build)
vectors = st.one_of(chains, st.tuples(chains, chains).map(lambda p: p[0].merge(p[1])))


@given(vectors)
def test_compare_is_reflexive(v):
    assert v.compare(v) is Occurred.IDENTICAL


@given(vectors, replicas)
def test_append_strictly_advances(v, key):
    later = v.append(key)
    assert later.compare(v) is Occurred.AFTER
    assert v.compare(later) is Occurred.BEFORE
    assert later.get(key).value == (v.get(key).value if v.contains(key) else 0) + 1


@given(vectors)
def test_merge_is_idempotent(v):
    assert _counts(v.merge(v)) == _counts(v)


@given(vectors, vectors)
def test_merge_is_commutative_on_counters(v1, v2):
    assert _counts(v1.merge(v2)) == _counts(v2.merge(v1))


@given(vectors, vectors, vectors)
def test_merge_is_associative_on_counters(v1, v2, v3):
    assert _counts(v1.merge(v2).merge(v3)) == _counts(v1.merge(v2.merge(v3)))


@given(vectors, vectors)
def test_merge_is_upper_bound(v1, v2):
    joined = v1.merge(v2)
    assert joined.compare(v1) in (Occurred.IDENTICAL, Occurred.AFTER)
    assert joined.compare(v2) in (Occurred.IDENTICAL, Occurred.AFTER)


@given(vectors, vectors)
def test_merge_never_drops_keys(v1, v2):
    joined = v1.merge(v2)
    assert set(joined.keys()) == set(v1.keys()) | set(v2.keys())


@given(replicas, replicas)
def test_single_writes_by_different_replicas_are_concurrent(k1, k2):
    a = VersionVector.create(k1)
    b = VersionVector.create(k2)
    expected = Occurred.IDENTICAL if k1 == k2 else Occurred.CONCURRENT
    assert a.compare(b) is expected


@given(vectors)
def test_serialization_round_trip(v):
    restored = VersionVector.from_dict(v.to_dict())
    assert _counts(restored) == _counts(v)
    assert restored.compare(v) is Occurred.IDENTICAL
