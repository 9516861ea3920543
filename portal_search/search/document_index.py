"""
In-memory document index with lexical snippet search.

Ingests the documents of a manifest through a text extraction capability
and answers free-text queries with a small set of ranked snippets. The
results feed the portal chatbot as grounding context, so the result set is
deliberately small.

Lifecycle: UNINITIALIZED -> INITIALIZING -> READY. Initialization runs once;
concurrent and later callers share the same future.
"""

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FuturesTimeoutError, wait
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, Union

from ..catalog import Manifest, ManifestEntry
from ..core import Config, SearchError, get_config, get_logger
from .models import DocumentRecord, IndexState, IngestionStats, SearchHit
from .query_parser import QueryParser
from .snippets import extract_snippet

logger = get_logger(__name__)


# Interval at which pending extractions are checked for timeout and cancellation
POLL_INTERVAL = 0.05


class TextExtractor(Protocol):
    """Capability producing the raw text of a document's first pages."""

    def extract_text(self, locator: str, max_pages: int) -> str:
        ...


ManifestLike = Union[Manifest, Iterable[Union[ManifestEntry, Mapping[str, Any]]]]


class DocumentIndex:
    """
    Lexical search over the extracted text of a document collection.

    Construct one per application and pass it to the components that
    search. The record collection is built once and never mutated
    afterwards, so searches need no locking.
    """

    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        config: Optional[Config] = None
    ):
        """
        Initialize an empty index.

        Args:
            extractor: Text extraction capability. Defaults to a PDFExtractor
                      built from config when ingestion starts.
            config: Configuration to use. Defaults to the cached config.
        """
        self.config = config or get_config()
        self.parser = QueryParser(min_token_length=self.config.search.min_token_length)

        self.max_results = self.config.search.max_results
        self.snippet_window = self.config.search.snippet_window

        self._extractor = extractor
        self._lock = threading.Lock()
        self._state = IndexState.UNINITIALIZED
        self._future: Optional["Future[IngestionStats]"] = None
        self._documents: Tuple[DocumentRecord, ...] = ()

    @property
    def state(self) -> IndexState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is IndexState.READY

    @property
    def documents(self) -> Tuple[DocumentRecord, ...]:
        """Indexed documents in manifest order."""
        return self._documents

    @property
    def document_count(self) -> int:
        return len(self._documents)

    @property
    def last_stats(self) -> Optional[IngestionStats]:
        """Stats of the completed ingestion pass, or None before READY."""
        future = self._future
        if future is None or not future.done():
            return None
        return future.result()

    def start(
        self,
        manifest: ManifestLike,
        cancel_event: Optional[threading.Event] = None
    ) -> "Future[IngestionStats]":
        """
        Start ingestion in the background, or join the existing pass.

        Only the first call starts an ingestion pass. Every later call,
        whether the pass is still running or already finished, returns the
        same future and ignores its arguments.

        Args:
            manifest: Documents to ingest.
            cancel_event: When set, no further documents are collected.
                         Documents collected so far stay indexed.

        Returns:
            Future resolving with IngestionStats once the index is READY.
            The future never resolves with an exception.
        """
        with self._lock:
            if self._future is not None:
                logger.debug(f"Ingestion already {self._state.value}, joining existing pass")
                return self._future

            self._state = IndexState.INITIALIZING

            coordinator = ThreadPoolExecutor(max_workers=1, thread_name_prefix="document-index")
            self._future = coordinator.submit(self._ingest, manifest, cancel_event)
            coordinator.shutdown(wait=False)

            return self._future

    def initialize(
        self,
        manifest: ManifestLike,
        cancel_event: Optional[threading.Event] = None
    ) -> IngestionStats:
        """
        Ingest a manifest and block until the index is READY.

        Idempotent: once READY, further calls return the stats of the
        completed pass without re-ingesting. Concurrent callers wait on the
        same pass.

        Args:
            manifest: Documents to ingest.
            cancel_event: Optional cancellation signal for the pass.

        Returns:
            IngestionStats of the (single) ingestion pass.
        """
        return self.start(manifest, cancel_event).result()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the index is READY.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            True if READY, False if not started or still initializing.
        """
        future = self._future
        if future is None:
            return False

        try:
            future.result(timeout=timeout)
        except FuturesTimeoutError:
            return False

        return True

    def search_content(self, query: str) -> List[SearchHit]:
        """
        Find the documents best matching a free-text query.

        Each query token (lowercased, at least min_token_length characters)
        found in a document adds one to its score. Documents are ranked by
        descending score, ties keep manifest order, and only the top
        max_results are returned.

        Args:
            query: Free-text user query.

        Returns:
            At most max_results hits; empty before READY, for queries
            without usable tokens, or when nothing matches.
        """
        if self._state is not IndexState.READY:
            logger.warning("Document index not initialized yet, returning no results")
            return []

        try:
            return self._search(query)
        except SearchError as e:
            logger.warning(f"Rejected search query: {e.message}")
            return []
        except Exception as e:
            logger.error(f"Search failed for query '{query}': {e}")
            return []

    def _search(self, query: str) -> List[SearchHit]:
        """Score every document against the query tokens."""
        start_time = time.time()

        terms = self.parser.tokenize(query)
        if not terms:
            return []

        scored: List[Tuple[int, DocumentRecord, str]] = []

        for record in self._documents:
            score = 0
            snippet = ""

            for term in terms:
                position = record.folded_content.find(term)
                if position == -1:
                    continue

                score += 1

                # The first matching token in query order anchors the snippet
                if not snippet:
                    snippet = extract_snippet(
                        record.content,
                        position,
                        len(term),
                        self.snippet_window
                    )

            if score > 0 and snippet:
                scored.append((score, record, snippet))

        scored.sort(key=lambda item: item[0], reverse=True)

        hits = [
            SearchHit(text=snippet, title=record.title, locator=record.locator)
            for _, record, snippet in scored[:self.max_results]
        ]

        execution_time = (time.time() - start_time) * 1000
        logger.debug(
            f"Search '{query}': {len(scored)} matching documents, "
            f"{len(hits)} returned in {execution_time:.1f}ms"
        )

        return hits

    def _ingest(
        self,
        manifest: ManifestLike,
        cancel_event: Optional[threading.Event]
    ) -> IngestionStats:
        """
        Run the ingestion pass and publish its records.

        Never raises: unexpected errors are logged and the index becomes
        READY with whatever was collected.
        """
        stats = IngestionStats()
        records: List[DocumentRecord] = []

        logger.info("Initializing document index...")

        try:
            entries = self._select_entries(manifest, stats)

            if cancel_event is not None and cancel_event.is_set():
                stats.cancelled = True
            elif entries:
                extractor = self._get_extractor()
                records = self._extract_all(extractor, entries, cancel_event, stats)

        except Exception as e:
            stats.errors.append(f"ingestion: {e}")
            logger.error(f"Document index ingestion aborted: {e}")

        stats.documents_indexed = len(records)

        with self._lock:
            self._documents = tuple(records)
            self._state = IndexState.READY

        logger.info(
            f"Document index initialization complete: {stats.documents_indexed} indexed, "
            f"{stats.documents_failed} failed, {stats.documents_timed_out} timed out, "
            f"{stats.documents_filtered} filtered"
            + (" (cancelled)" if stats.cancelled else "")
        )

        return stats

    def _get_extractor(self) -> TextExtractor:
        """Return the injected extractor or build the default PDF extractor."""
        if self._extractor is None:
            from ..extraction import PDFExtractor
            self._extractor = PDFExtractor(config=self.config)
        return self._extractor

    def _select_entries(self, manifest: ManifestLike, stats: IngestionStats) -> List[ManifestEntry]:
        """Keep extractable entries, up to the configured document cap."""
        if not isinstance(manifest, Manifest):
            manifest = Manifest(manifest)

        stats.documents_requested = len(manifest)

        entries = list(manifest.supported(self.config.extraction.supported_extensions))
        kept = set(entries)

        for entry in manifest:
            if entry not in kept:
                logger.debug(f"Skipping unsupported document type: {entry.title} ({entry.locator})")

        max_documents = self.config.indexing.max_documents
        if max_documents and len(entries) > max_documents:
            logger.info(f"Limiting ingestion to the first {max_documents} of {len(entries)} documents")
            entries = entries[:max_documents]

        stats.documents_filtered = stats.documents_requested - len(entries)

        return entries

    def _extract_all(
        self,
        extractor: TextExtractor,
        entries: List[ManifestEntry],
        cancel_event: Optional[threading.Event],
        stats: IngestionStats
    ) -> List[DocumentRecord]:
        """
        Extract entries in a worker pool, collecting results in manifest order.

        A timed-out extraction cannot be interrupted and keeps its worker
        busy. Entries still queued at that point are moved to a fresh pool
        so they never wait behind an abandoned worker.
        """
        max_pages = self.config.extraction.max_pages
        max_workers = min(self.config.indexing.max_workers, len(entries))
        started: Dict[int, float] = {}

        def run(index: int, entry: ManifestEntry) -> str:
            started[index] = time.monotonic()
            return extractor.extract_text(entry.locator, max_pages)

        records: List[DocumentRecord] = []
        pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="document-extract")

        try:
            futures = [
                pool.submit(run, index, entry)
                for index, entry in enumerate(entries)
            ]

            for index, entry in enumerate(entries):
                if cancel_event is not None and cancel_event.is_set():
                    stats.cancelled = True
                    logger.info(f"Ingestion cancelled before loading: {entry.title}")
                    break

                if not self._await_extraction(index, entry, futures[index], started, cancel_event, stats):
                    if stats.cancelled:
                        break

                    pool = self._replace_pool(pool, futures, index + 1, entries, run, max_workers)
                    continue

                try:
                    content = futures[index].result() or ""
                except Exception as e:
                    stats.documents_failed += 1
                    stats.errors.append(f"{entry.title}: {e}")
                    logger.warning(f"Error loading document {entry.title}: {e}")
                    continue

                records.append(DocumentRecord(
                    title=entry.title,
                    locator=entry.locator,
                    category=entry.category,
                    content=content
                ))
                logger.info(f"Loaded document: {entry.title}")

        finally:
            # Hanging extractions are abandoned rather than awaited
            pool.shutdown(wait=False, cancel_futures=True)

        return records

    def _replace_pool(
        self,
        pool: ThreadPoolExecutor,
        futures: List[Future],
        first_pending: int,
        entries: List[ManifestEntry],
        run,
        max_workers: int
    ) -> ThreadPoolExecutor:
        """
        Move extractions that have not started yet to a new pool.

        Futures that are already running or done stay with the old pool,
        which is shut down without waiting.
        """
        pending = [
            index for index in range(first_pending, len(futures))
            if futures[index].cancel()
        ]

        pool.shutdown(wait=False, cancel_futures=True)

        if not pending:
            return pool

        new_pool = ThreadPoolExecutor(
            max_workers=min(max_workers, len(pending)),
            thread_name_prefix="document-extract"
        )
        for index in pending:
            futures[index] = new_pool.submit(run, index, entries[index])

        logger.debug(f"Moved {len(pending)} queued extractions to a new worker pool")

        return new_pool

    def _await_extraction(
        self,
        index: int,
        entry: ManifestEntry,
        future: Future,
        started: Dict[int, float],
        cancel_event: Optional[threading.Event],
        stats: IngestionStats
    ) -> bool:
        """
        Wait for one extraction, honouring cancellation and the timeout.

        The timeout runs from the moment a worker picks the entry up.

        Returns:
            True once the future is done, False if the document was given
            up on (timeout) or the pass was cancelled.
        """
        timeout = self.config.indexing.document_timeout_seconds

        while not future.done():
            if cancel_event is not None and cancel_event.is_set():
                stats.cancelled = True
                logger.info(f"Ingestion cancelled before loading: {entry.title}")
                return False

            wait([future], timeout=POLL_INTERVAL)

            started_at = started.get(index)
            if (
                timeout
                and started_at is not None
                and not future.done()
                and time.monotonic() - started_at > timeout
            ):
                stats.documents_timed_out += 1
                stats.errors.append(f"{entry.title}: timed out after {timeout}s")
                logger.warning(f"Timed out loading document {entry.title} after {timeout}s")
                return False

        return True
