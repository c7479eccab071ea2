"""
Tests for toolagents/memory/store.py - KnowledgeStore.

Covers upsert, the four query modes, relationships, context traversal,
TTL expiry (lazy and swept) and capacity bounds.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from toolagents.errors import CapacityError
from toolagents.memory import KnowledgeStore, SimilarityScorer


def keys(results):
    return [r["key"] for r in results]


# ============================================================================
# store / exact query
# ============================================================================

class TestStoreAndExactQuery:

    def test_exact_query_returns_stored_node(self, store):
        store.store("k1", "hello")

        result = store.query("k1", type="exact")

        assert result["count"] == 1
        assert result["results"][0]["key"] == "k1"
        assert result["results"][0]["content"] == "hello"
        assert result["results"][0]["score"] == 1.0

    def test_exact_query_unknown_key(self, store):
        assert store.query("missing", type="exact")["results"] == []

    def test_store_response_shape(self, store):
        result = store.store("k1", "hello", ttl=10)

        assert result["key"] == "k1"
        assert result["stored"] is True
        assert result["replaced"] is False
        assert result["expiresAt"] is not None

    def test_no_ttl_means_no_expiry(self, store):
        assert store.store("k1", "hello")["expiresAt"] is None

    def test_overwrite_replaces_content(self, store):
        store.store("k1", "first", metadata={"category": "a"})
        result = store.store("k1", "second")

        assert result["replaced"] is True
        assert store.count() == 1

        match = store.query("k1", type="exact")["results"][0]
        assert match["content"] == "second"
        assert match["metadata"] == {}

    def test_overwrite_keeps_relationships(self, store):
        store.store("k1", "first")
        store.create_relationship("k1", "k2", "depends_on")
        store.create_relationship("k0", "k1", "mentions")

        store.store("k1", "second")

        match = store.query("k1", type="exact", include_relationships=True)["results"][0]
        assert [r["toKey"] for r in match["relationships"]] == ["k2"]
        assert store.stats()["relationshipCount"] == 2

    def test_tags_are_deduplicated_and_sorted(self, store):
        store.store("k1", "hello", metadata={"tags": ["b", "a", "b"]})

        match = store.query("k1", type="exact")["results"][0]
        assert match["metadata"]["tags"] == ["a", "b"]

    def test_include_metadata_false(self, store):
        store.store("k1", "hello", metadata={"source": "unit"})

        match = store.query("k1", type="exact", include_metadata=False)["results"][0]
        assert "metadata" not in match

    def test_unsupported_query_type(self, store):
        with pytest.raises(ValueError):
            store.query("x", type="regex")


# ============================================================================
# fuzzy
# ============================================================================

class TestFuzzyQuery:

    def test_concrete_scenario_ranks_match_first(self, store):
        store.store("k1", "hello")
        store.store("k2", "something else")

        result = store.query("hello", type="fuzzy", limit=5)

        assert keys(result["results"]) == ["k1"]
        assert result["results"][0]["score"] == 1.0

    def test_zero_score_nodes_dropped(self, store):
        store.store("a", "alpha beta")
        store.store("x", "zzz")

        assert keys(store.query("alpha")["results"]) == ["a"]

    def test_ties_broken_newest_first(self, store, clock):
        store.store("old", "alpha beta")
        clock.advance(1)
        store.store("new", "alpha beta")

        assert keys(store.query("alpha")["results"]) == ["new", "old"]

    def test_partial_token_overlap_ranks_lower(self, store):
        store.store("full", "red green")
        store.store("half", "red only")

        results = store.query("red green")["results"]

        assert keys(results) == ["full", "half"]
        assert results[1]["score"] == pytest.approx(0.25)

    def test_case_insensitive(self, store):
        store.store("k1", "Hello World")

        assert keys(store.query("hello")["results"]) == ["k1"]

    def test_limit_is_clamped_to_100(self, store):
        for i in range(120):
            store.store(f"item-{i}", "common text")

        assert store.query("common", limit=500)["count"] == 100

    def test_limit_respected(self, store):
        for i in range(5):
            store.store(f"item-{i}", "common text")

        assert store.query("common", limit=3)["count"] == 3


# ============================================================================
# semantic
# ============================================================================

class KeywordScorer(SimilarityScorer):

    def __init__(self, keyword):
        self.keyword = keyword
        self.calls = 0

    def score(self, query, texts):
        self.calls += 1
        return [1.0 if self.keyword in text else 0.0 for text in texts]


class TestSemanticQuery:

    def test_uses_injected_scorer(self, clock):
        scorer = KeywordScorer("apple")
        store = KnowledgeStore(scorer=scorer, clock=clock)
        store.store("fruit", "an apple a day")
        store.store("veg", "a carrot")

        result = store.query("anything", type="semantic")

        assert scorer.calls == 1
        assert keys(result["results"]) == ["fruit"]

    def test_default_scorer_prefers_overlapping_text(self, store):
        store.store("doc", "learning learning")
        store.store("other", "cooking recipes")

        result = store.query("learning", type="semantic")

        assert result["results"][0]["key"] == "doc"


# ============================================================================
# graph
# ============================================================================

class TestGraphQuery:

    def test_seed_and_direct_neighbours(self, store):
        for key in ("a", "b", "c"):
            store.store(key, key)
        store.create_relationship("a", "b", "next")
        store.create_relationship("b", "c", "next")

        results = store.query("a", type="graph")["results"]

        assert keys(results) == ["a", "b"]
        assert results[0]["score"] == 1.0
        assert results[1]["score"] == 0.5

    def test_unknown_seed(self, store):
        assert store.query("ghost", type="graph")["count"] == 0


# ============================================================================
# relationships / context
# ============================================================================

class TestContext:

    def test_relationship_response(self, store):
        rel = store.create_relationship("a", "b", "related_to", strength=0.7)

        assert rel["id"].startswith("rel_")
        assert rel["fromKey"] == "a"
        assert rel["toKey"] == "b"
        assert rel["relationshipType"] == "related_to"
        assert rel["strength"] == 0.7

    def test_relationship_is_directed(self, store):
        store.store("a", "A")
        store.store("b", "B")
        store.create_relationship("a", "b", "related_to", strength=0.7)

        forward = store.get_context("a", depth=1)
        backward = store.get_context("b", depth=1)

        assert keys(forward["related"]) == ["b"]
        hop = forward["related"][0]
        assert hop["distance"] == 1
        assert hop["relationship"]["type"] == "related_to"
        assert hop["relationship"]["strength"] == 0.7
        assert backward["related"] == []

    def test_incoming_direction(self, store):
        store.store("a", "A")
        store.store("b", "B")
        store.create_relationship("a", "b", "related_to")

        related = store.get_context("b", direction="incoming")["related"]

        assert keys(related) == ["a"]
        assert related[0]["relationship"]["direction"] == "incoming"

    def test_cycle_never_repeats_nodes(self, store):
        for key in ("a", "b", "c"):
            store.store(key, key)
        store.create_relationship("a", "b", "next")
        store.create_relationship("b", "c", "next")
        store.create_relationship("c", "a", "next")

        related = store.get_context("a", depth=5)["related"]

        assert keys(related) == ["b", "c"]
        assert [r["distance"] for r in related] == [1, 2]

    def test_depth_bounds_traversal(self, store):
        for key in ("a", "b", "c"):
            store.store(key, key)
        store.create_relationship("a", "b", "next")
        store.create_relationship("b", "c", "next")

        assert keys(store.get_context("a", depth=1)["related"]) == ["b"]

    def test_depth_is_clamped(self, store):
        store.store("a", "A")
        assert store.get_context("a", depth=10)["depth"] == 5

    def test_relationship_type_filter(self, store):
        for key in ("a", "b", "c"):
            store.store(key, key)
        store.create_relationship("a", "b", "x")
        store.create_relationship("a", "c", "y")

        related = store.get_context("a", relationship_types=["y"])["related"]

        assert keys(related) == ["c"]

    def test_duplicate_edges_both_kept(self, store):
        store.store("a", "A")
        store.store("b", "B")
        first = store.create_relationship("a", "b", "x")
        second = store.create_relationship("a", "b", "x")

        assert first["id"] != second["id"]
        match = store.query("a", type="exact", include_relationships=True)["results"][0]
        assert len(match["relationships"]) == 2
        assert keys(store.get_context("a")["related"]) == ["b"]

    def test_dangling_edges_are_skipped(self, store):
        store.store("a", "A")
        store.create_relationship("a", "ghost", "x")

        assert store.get_context("a")["related"] == []

    def test_include_content_false(self, store):
        store.store("a", "A")
        store.store("b", "B")
        store.create_relationship("a", "b", "x")

        hop = store.get_context("a", include_content=False)["related"][0]

        assert hop["node"] == {"key": "b"}

    def test_related_entries_carry_node_view(self, store):
        store.store("a", "A")
        store.store("b", "B", metadata={"category": "letters"})
        store.create_relationship("a", "b", "x")

        hop = store.get_context("a")["related"][0]

        assert set(hop) == {"key", "distance", "relationship", "node"}
        assert hop["node"]["key"] == "b"
        assert hop["node"]["content"] == "B"
        assert hop["node"]["metadata"] == {"category": "letters"}

    def test_concrete_scenario(self, store):
        store.store("k1", "hello")
        store.store("k2", "world")
        store.create_relationship("k1", "k2", "depends_on", strength=0.9)

        context = store.get_context("k1", depth=2)
        assert context["node"]["key"] == "k1"
        assert keys(context["related"]) == ["k2"]
        assert context["related"][0]["distance"] == 1

        store.delete("k1")

        assert store.get_context("k1", depth=2) == {
            "key": "k1",
            "node": None,
            "related": [],
            "depth": 2,
        }


# ============================================================================
# delete
# ============================================================================

class TestDelete:

    def test_delete_existing(self, store):
        store.store("k1", "hello")

        assert store.delete("k1") == {"key": "k1", "deleted": True}
        assert store.count() == 0

    def test_delete_missing(self, store):
        assert store.delete("k1") == {"key": "k1", "deleted": False}

    def test_delete_keeps_edges(self, store):
        store.store("k1", "hello")
        store.create_relationship("k1", "k2", "x")

        store.delete("k1")

        assert store.stats() == {"knowledgeCount": 0, "relationshipCount": 1}


# ============================================================================
# TTL
# ============================================================================

class TestExpiry:

    def test_present_before_ttl_absent_after(self, store, clock):
        store.store("t", "temporary note", ttl=1)
        assert store.query("t", type="exact")["count"] == 1

        clock.advance(1)

        assert store.query("t", type="exact")["count"] == 0
        assert store.query("temporary", type="fuzzy")["count"] == 0
        assert store.query("temporary", type="semantic")["count"] == 0
        assert store.get_context("t")["node"] is None
        assert store.count() == 0

    def test_expired_neighbour_skipped(self, store, clock):
        store.store("a", "A")
        store.store("b", "B", ttl=5)
        store.create_relationship("a", "b", "x")

        clock.advance(10)

        assert store.get_context("a")["related"] == []

    def test_overwrite_resets_expiry(self, store, clock):
        store.store("k", "v1", ttl=1)
        store.store("k", "v2")

        clock.advance(5)

        assert store.query("k", type="exact")["results"][0]["content"] == "v2"

    def test_sweep_removes_expired(self, store, clock):
        store.store("t", "temp", ttl=1)
        store.store("p", "permanent")
        clock.advance(2)

        assert store.sweep_expired() == 1
        nodes, _ = store.snapshot()
        assert [n.key for n in nodes] == ["p"]

    def test_sweep_with_nothing_expired(self, store):
        store.store("p", "permanent")
        assert store.sweep_expired() == 0

    def test_sweep_keeps_key_restored_after_snapshot(self, store, clock, monkeypatch):
        store.store("k", "stale", ttl=1)
        clock.advance(2)

        graph = store._graph
        get_node = graph.get_node
        restored = []

        def restore_then_get(key):
            if not restored:
                restored.append(key)
                store.store(key, "fresh")
            return get_node(key)

        monkeypatch.setattr(graph, "get_node", restore_then_get)

        assert store.sweep_expired() == 0
        assert restored == ["k"]
        assert store.query("k", type="exact")["results"][0]["content"] == "fresh"

    def test_out_of_range_ttl_leaves_store_untouched(self, store):
        store.store("ok", "hello world")

        with pytest.raises(ValueError, match="ttl"):
            store.store("big", "hello", ttl=1e12)

        assert store.count() == 1
        assert keys(store.query("hello")["results"]) == ["ok"]


# ============================================================================
# capacity
# ============================================================================

class TestCapacity:

    def test_full_store_rejects_new_keys(self, clock):
        store = KnowledgeStore(max_items=2, clock=clock)
        store.store("a", "A")
        store.store("b", "B")

        with pytest.raises(CapacityError):
            store.store("c", "C")

    def test_full_store_allows_overwrite(self, clock):
        store = KnowledgeStore(max_items=2, clock=clock)
        store.store("a", "A")
        store.store("b", "B")

        assert store.store("a", "A2")["replaced"] is True

    def test_expired_nodes_make_room(self, clock):
        store = KnowledgeStore(max_items=2, clock=clock)
        store.store("a", "A", ttl=1)
        store.store("b", "B")
        clock.advance(2)

        assert store.store("c", "C")["stored"] is True
        assert store.count() == 2


# ============================================================================
# concurrency
# ============================================================================

class TestConcurrency:

    WRITERS = 4
    WRITES = 50

    def test_readers_never_see_partial_writes(self):
        store = KnowledgeStore()
        start = threading.Barrier(self.WRITERS + 2)
        torn = []

        def write(writer):
            start.wait()
            for seq in range(self.WRITES):
                key = f"w{writer}-{seq}"
                store.store(
                    key,
                    f"note {writer} {seq}",
                    metadata={"writer": writer, "seq": seq},
                )
                if seq:
                    store.create_relationship(f"w{writer}-{seq - 1}", key, "next")

        def read():
            start.wait()
            for _ in range(self.WRITES):
                for match in store.query("note", limit=100)["results"]:
                    meta = match["metadata"]
                    if match["content"] != f"note {meta['writer']} {meta['seq']}":
                        torn.append(match)
                context = store.get_context("w0-0", depth=5)
                for hop in context["related"]:
                    if hop["node"]["key"] != hop["relationship"]["toKey"]:
                        torn.append(hop)

        with ThreadPoolExecutor(max_workers=self.WRITERS + 2) as pool:
            futures = [pool.submit(write, w) for w in range(self.WRITERS)]
            futures += [pool.submit(read) for _ in range(2)]
            for future in futures:
                future.result()

        assert torn == []
        assert store.stats() == {
            "knowledgeCount": self.WRITERS * self.WRITES,
            "relationshipCount": self.WRITERS * (self.WRITES - 1),
        }
        chain = store.get_context("w0-0", depth=5)["related"]
        assert [hop["distance"] for hop in chain] == [1, 2, 3, 4, 5]

    def test_sweep_races_with_writers(self, clock):
        store = KnowledgeStore(clock=clock)
        for i in range(100):
            store.store(f"t{i}", "temp", ttl=1)
        clock.advance(2)

        def rewrite():
            for i in range(0, 100, 2):
                store.store(f"t{i}", "fresh")

        with ThreadPoolExecutor(max_workers=2) as pool:
            swept = pool.submit(store.sweep_expired)
            pool.submit(rewrite).result()
            swept.result()

        store.sweep_expired()

        nodes, _ = store.snapshot()
        assert sorted(n.key for n in nodes) == sorted(f"t{i}" for i in range(0, 100, 2))
        assert all(n.content == "fresh" for n in nodes)
