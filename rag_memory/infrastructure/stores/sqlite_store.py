import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ...core.exceptions import CorruptRowError, EmbeddingDimensionError, StorageError
from ...core.models.document import Chunk, SearchHit
from ...core.strategies.scoring import CosineSimilarity, SimilarityStrategy, rank_hits
from .embedding_codec import decode_embedding, encode_embedding

logger = logging.getLogger(__name__)

SCHEMA = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS chunks (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  source_id TEXT NOT NULL,
  chunk_index INTEGER NOT NULL,
  text TEXT NOT NULL,
  embedding_json TEXT NOT NULL,
  page_number INTEGER,
  title TEXT
);

CREATE UNIQUE INDEX IF NOT EXISTS ux_chunks_source_chunk
ON chunks(source_id, chunk_index);

CREATE TABLE IF NOT EXISTS store_meta (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
"""

CLAIM_DIMENSION = "INSERT OR IGNORE INTO store_meta (key, value) VALUES ('embedding_dim', ?)"

UPSERT_CHUNK = """
INSERT INTO chunks (source_id, chunk_index, text, embedding_json, page_number, title)
VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(source_id, chunk_index)
DO UPDATE SET
  text = excluded.text,
  embedding_json = excluded.embedding_json,
  page_number = excluded.page_number,
  title = excluded.title
"""


class SQLiteChunkStore:
    """Chunk store on a local SQLite file with exhaustive cosine search."""

    def __init__(
        self,
        path: str = "rag_memories.db",
        similarity: Optional[SimilarityStrategy] = None,
        busy_timeout: float = 30.0,
    ):
        """Initialize store.

        Args:
            path: SQLite database file.
            similarity: Scoring metric (cosine by default).
            busy_timeout: Seconds a writer waits for a competing lock.
        """
        self._path = path
        self._similarity = similarity or CosineSimilarity()
        self._busy_timeout = busy_timeout
        self._initialized = False

    @property
    def path(self) -> str:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._path, timeout=self._busy_timeout)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success, always close.

        sqlite3 errors surface as StorageError.
        """
        if not self._initialized:
            self.init()
        try:
            con = self._connect()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self._path}: {e}") from e
        try:
            yield con
            con.commit()
        except sqlite3.Error as e:
            con.rollback()
            raise StorageError(f"SQLite error on {self._path}: {e}") from e
        finally:
            con.close()

    def init(self) -> None:
        """Create schema if missing."""
        try:
            con = self._connect()
            try:
                con.executescript(SCHEMA)
                con.commit()
            finally:
                con.close()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize {self._path}: {e}") from e

        if not self._initialized:
            logger.info(f"Chunk store ready: {self._path}")
        self._initialized = True

    def upsert(
        self,
        source_id: str,
        chunk_index: int,
        text: str,
        embedding: Sequence[float],
        page_number: int | None = None,
        title: str | None = None,
    ) -> None:
        """Insert a chunk or replace text and embedding for an existing key.

        The write is one statement in its own transaction, so a concurrent
        reader sees either the old row or the new row, never a mix.
        """
        if chunk_index < 0:
            raise ValueError(f"chunk_index must be >= 0, got {chunk_index}")
        if len(embedding) == 0:
            raise ValueError(f"Embedding for {source_id}#{chunk_index} is empty")

        try:
            embedding_json = encode_embedding(embedding)
        except ValueError as e:
            raise ValueError(f"Embedding for {source_id}#{chunk_index} is not finite") from e

        with self._connection() as con:
            expected = self._claim_dimension(con, len(embedding))
            if expected != len(embedding):
                raise EmbeddingDimensionError(expected, len(embedding))
            con.execute(
                UPSERT_CHUNK,
                (source_id, chunk_index, text, embedding_json, page_number, title),
            )

    def _claim_dimension(self, con: sqlite3.Connection, dim: int) -> int:
        """Return the store's embedding dimensionality, recording dim if unset.

        The INSERT takes the write lock, so concurrent first writers agree.
        A database filled before the meta table existed is seeded from one
        of its rows.
        """
        seed = dim
        row = con.execute("SELECT embedding_json FROM chunks LIMIT 1").fetchone()
        if row is not None:
            try:
                seed = len(decode_embedding(row[0]))
            except CorruptRowError as e:
                logger.warning(f"Cannot seed embedding dimension: {e.reason}")

        con.execute(CLAIM_DIMENSION, (str(seed),))
        value = con.execute(
            "SELECT value FROM store_meta WHERE key = 'embedding_dim'"
        ).fetchone()[0]
        return int(value)

    def embedding_dim(self) -> int | None:
        """Dimensionality shared by stored embeddings, None for an empty store."""
        with self._connection() as con:
            row = con.execute(
                "SELECT value FROM store_meta WHERE key = 'embedding_dim'"
            ).fetchone()
        return int(row[0]) if row else None

    def search(self, query_embedding: Sequence[float], top_k: int = 6) -> list[SearchHit]:
        """Score all stored chunks and return the top_k.

        Rows whose embedding fails to decode are logged and skipped.
        """
        if top_k <= 0:
            return []

        scored: list[tuple[SearchHit, int]] = []
        skipped = 0

        with self._connection() as con:
            rows = con.execute(
                "SELECT id, source_id, chunk_index, text, embedding_json FROM chunks"
            )
            for row_id, source_id, chunk_index, text, embedding_json in rows:
                try:
                    embedding = decode_embedding(embedding_json, row_id=row_id)
                except CorruptRowError as e:
                    skipped += 1
                    logger.warning(f"Skipping {source_id}#{chunk_index}: {e.reason}")
                    continue

                score = self._similarity.score(query_embedding, embedding)
                scored.append(
                    (SearchHit(source_id, chunk_index, text, score), row_id)
                )

        hits = rank_hits(scored, top_k)
        logger.debug(
            f"Search scanned {len(scored) + skipped} rows "
            f"(skipped {skipped}), returned {len(hits)}"
        )
        return hits

    def get_chunk(self, source_id: str, chunk_index: int) -> Chunk | None:
        """Load a chunk by key.

        Raises:
            CorruptRowError: If the stored embedding is malformed.
        """
        with self._connection() as con:
            row = con.execute(
                """
                SELECT id, text, embedding_json, page_number, title
                FROM chunks WHERE source_id = ? AND chunk_index = ?
                """,
                (source_id, chunk_index),
            ).fetchone()

        if row is None:
            return None

        row_id, text, embedding_json, page_number, title = row
        return Chunk(
            source_id=source_id,
            chunk_index=chunk_index,
            text=text,
            embedding=decode_embedding(embedding_json, row_id=row_id),
            page_number=page_number,
            title=title,
        )

    def count(self) -> int:
        with self._connection() as con:
            return con.execute("SELECT COUNT(*) FROM chunks").fetchone()[0]

    def list_sources(self) -> list[tuple[str, int]]:
        with self._connection() as con:
            rows = con.execute(
                "SELECT source_id, COUNT(*) FROM chunks GROUP BY source_id ORDER BY source_id"
            ).fetchall()
        return [(source_id, count) for source_id, count in rows]

    def delete_source(self, source_id: str) -> int:
        with self._connection() as con:
            cur = con.execute("DELETE FROM chunks WHERE source_id = ?", (source_id,))
            deleted = cur.rowcount
            if con.execute("SELECT 1 FROM chunks LIMIT 1").fetchone() is None:
                con.execute("DELETE FROM store_meta WHERE key = 'embedding_dim'")

        if deleted:
            logger.info(f"Deleted {deleted} chunks for {source_id}")
        return deleted
