"""Database schema for chunk index files."""

SCHEMA = """
-- Chunks table: one row per indexed chunk, keyed by its chunk id
CREATE TABLE IF NOT EXISTS chunks (
    id TEXT PRIMARY KEY,
    file TEXT NOT NULL,
    type TEXT NOT NULL,
    name TEXT NOT NULL DEFAULT '',
    repository TEXT NOT NULL DEFAULT '',
    content TEXT NOT NULL,
    chunk_type TEXT NOT NULL DEFAULT 'ast'
);

-- Vectors table: float32 embeddings
CREATE TABLE IF NOT EXISTS vectors (
    chunk_id TEXT PRIMARY KEY,
    embedding BLOB NOT NULL,
    FOREIGN KEY (chunk_id) REFERENCES chunks(id) ON DELETE CASCADE
);

-- Metadata table: index-level key/value pairs
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);

CREATE INDEX IF NOT EXISTS idx_chunks_file ON chunks(file);
CREATE INDEX IF NOT EXISTS idx_chunks_repository ON chunks(repository);
"""

# Metadata keys that map onto chunk columns and can be used as query filters
METADATA_COLUMNS = ("file", "type", "name", "repository", "content", "chunk_type")
FILTER_COLUMNS = ("file", "type", "name", "repository", "chunk_type")
