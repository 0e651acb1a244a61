import numpy as np
import pytest

from gitgist.indexing import ChunkIndexer
from gitgist.models import Chunk, ChunkType
from gitgist.protocols import EmbeddingProvider
from gitgist.storage import ChunkStore


def _chunks(texts):
    return [
        Chunk(id=f"src/a.ts::c{i}", text=text, type=ChunkType.FUNCTION, file="src/a.ts", name=f"c{i}")
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def store(tmp_path):
    store = ChunkStore(tmp_path / "index.gitgist")
    store.initialize()
    return store


class _BrokenStore:
    def __init__(self):
        self.stored = []

    def upsert(self, chunk_id, vector, metadata):
        if chunk_id.endswith("c1"):
            raise RuntimeError("disk full")
        self.stored.append((chunk_id, metadata))

    def query(self, vector, top_k=10, filter=None):
        return []


def test_fake_embedder_satisfies_protocol(fake_embedder) -> None:
    assert isinstance(fake_embedder, EmbeddingProvider)


def test_indexes_all_chunks_in_batches(fake_embedder, store) -> None:
    chunks = _chunks(["Function: load", "Function: save", "Class: Repo", "Variables: x"])

    report = ChunkIndexer(fake_embedder, store, batch_size=3).index(chunks, "owner/repo")

    assert report.ok
    assert (report.total_chunks, report.embedded_chunks, report.failed_chunks) == (4, 4, 0)
    assert [len(call) for call in fake_embedder.calls] == [3, 1]
    assert store.count() == 4

    query = fake_embedder.embed(["Class: Repo"])[0]
    best = store.query(query, top_k=1)[0]
    assert best.id == "src/a.ts::c2"
    assert best.metadata["repository"] == "owner/repo"


def test_failed_batch_does_not_stop_the_run(failing_embedder, store) -> None:
    chunks = _chunks(["ok one", "ok two", "boom", "ok three", "ok four"])

    report = ChunkIndexer(failing_embedder, store, batch_size=2).index(chunks)

    assert report.embedded_chunks == 3
    assert report.failed_chunks == 2
    assert len(report.errors) == 1
    assert "src/a.ts::c2..src/a.ts::c3" in report.errors[0]
    assert store.count() == 3


def test_store_failures_are_recorded_per_chunk(fake_embedder) -> None:
    store = _BrokenStore()

    report = ChunkIndexer(fake_embedder, store).index(_chunks(["a", "b", "c"]))

    assert report.embedded_chunks == 2
    assert report.failed_chunks == 1
    assert report.errors == ["Failed to store chunk src/a.ts::c1: disk full"]
    assert [chunk_id for chunk_id, _ in store.stored] == ["src/a.ts::c0", "src/a.ts::c2"]


def test_mismatched_vector_count_fails_the_batch(store) -> None:
    class ShortEmbedder:
        model_name = "short"
        dimension = 2

        def embed(self, texts):
            return np.zeros((1, 2), dtype=np.float32)

    report = ChunkIndexer(ShortEmbedder(), store).index(_chunks(["a", "b"]))

    assert report.failed_chunks == 2
    assert not report.ok


def test_empty_input_and_batch_size_validation(fake_embedder, store) -> None:
    report = ChunkIndexer(fake_embedder, store).index([])

    assert report.total_chunks == 0
    assert fake_embedder.calls == []

    with pytest.raises(ValueError):
        ChunkIndexer(fake_embedder, store, batch_size=0)
