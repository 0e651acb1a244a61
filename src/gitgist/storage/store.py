"""SQLite-backed vector store for chunk embeddings."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional

import numpy as np

from gitgist.protocols import VectorMatch
from gitgist.storage.schema import FILTER_COLUMNS, METADATA_COLUMNS, SCHEMA


class ChunkStore:
    """SQLite-backed vector store.

    Vectors are stored as float32 blobs and ranked by cosine similarity
    at query time.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def upsert(self, chunk_id: str, vector: np.ndarray, metadata: Mapping[str, str]) -> None:
        """Insert or replace a single chunk vector."""
        self.upsert_many([(chunk_id, vector, metadata)])

    def upsert_many(self, items: Iterable[tuple[str, np.ndarray, Mapping[str, str]]]) -> int:
        """Insert or replace several chunk vectors in one transaction.

        Returns:
            Number of vectors written
        """
        written = 0
        with self.connection() as conn:
            for chunk_id, vector, metadata in items:
                row = {col: str(metadata.get(col, "")) for col in METADATA_COLUMNS}
                row["chunk_type"] = row["chunk_type"] or "ast"
                conn.execute(
                    """INSERT OR REPLACE INTO chunks
                       (id, file, type, name, repository, content, chunk_type)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (chunk_id, *(row[col] for col in METADATA_COLUMNS)),
                )
                conn.execute(
                    "INSERT OR REPLACE INTO vectors (chunk_id, embedding) VALUES (?, ?)",
                    (chunk_id, np.asarray(vector, dtype=np.float32).tobytes()),
                )
                written += 1
        return written

    def query(
        self,
        vector: np.ndarray,
        top_k: int = 10,
        filter: Optional[Mapping[str, str]] = None,
    ) -> list[VectorMatch]:
        """Find the chunks most similar to vector.

        Args:
            vector: Query embedding
            top_k: Maximum number of matches to return
            filter: Exact-match constraints on file, type, name, repository or chunk_type

        Returns:
            Matches ordered by descending similarity
        """
        clauses = []
        params: list[str] = []
        for key, value in (filter or {}).items():
            if key not in FILTER_COLUMNS:
                raise ValueError(f"Unsupported filter key: {key}")
            clauses.append(f"c.{key} = ?")
            params.append(value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        query_vec = np.asarray(vector, dtype=np.float32)
        with self.connection() as conn:
            cursor = conn.execute(
                f"""SELECT c.*, v.embedding
                    FROM chunks c JOIN vectors v ON c.id = v.chunk_id {where}""",
                params,
            )

            matches = []
            for row in cursor:
                stored = np.frombuffer(row["embedding"], dtype=np.float32)
                matches.append(
                    VectorMatch(
                        id=row["id"],
                        score=self._cosine_similarity(query_vec, stored),
                        metadata={col: row[col] for col in METADATA_COLUMNS},
                    )
                )

        # Stable sort keeps insertion order among equal scores
        matches.sort(key=lambda m: m.score, reverse=True)
        return matches[:top_k]

    def count(self) -> int:
        with self.connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM vectors").fetchone()[0]

    def list_files(self, repository: Optional[str] = None) -> list[dict]:
        """List indexed files with their chunk counts."""
        with self.connection() as conn:
            if repository is None:
                cursor = conn.execute(
                    "SELECT file, COUNT(*) AS chunks FROM chunks GROUP BY file ORDER BY file"
                )
            else:
                cursor = conn.execute(
                    """SELECT file, COUNT(*) AS chunks FROM chunks
                       WHERE repository = ? GROUP BY file ORDER BY file""",
                    (repository,),
                )
            return [dict(row) for row in cursor]

    def set_metadata(self, key: str, value: str) -> None:
        """Store a metadata key-value pair."""
        with self.connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_metadata(self, key: str) -> Optional[str]:
        """Retrieve a metadata value by key."""
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    @staticmethod
    def _cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        """Compute cosine similarity between two vectors."""
        norm_a = np.linalg.norm(a)
        norm_b = np.linalg.norm(b)
        if norm_a == 0 or norm_b == 0:
            return 0.0
        return float(np.dot(a, b) / (norm_a * norm_b))
