import argparse
import asyncio
import logging
import sys
import time

import httpx

from rag_memory.config.settings import Settings, settings
from rag_memory.container import configure_container, container
from rag_memory.core.exceptions import (
    AnsweringModelError,
    NoExtractableContentError,
    RagMemoryError,
)
from rag_memory.core.protocols.chunk_store import ChunkStoreProtocol
from rag_memory.core.services.ask_service import AskService
from rag_memory.core.services.ingest_service import IngestService
from rag_memory.presentation.messages import pick_fallback

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SERVER_ERROR = 1
EXIT_CLIENT_ERROR = 2


def ollama_has_models(cfg: Settings, attempts: int = 1) -> bool:
    """Check that the chat (and embedding) models are pulled in Ollama.

    Returns:
        True if all models are available, False otherwise.
    """
    wanted = [cfg.llm_model]
    if cfg.embedding_backend == "ollama":
        wanted.append(cfg.embedding_model)
    base_url = cfg.llm_base_url.replace("/v1", "")

    logger.info(f"Checking Ollama models: {', '.join(wanted)}")

    for attempt in range(attempts):
        try:
            resp = httpx.get(f"{base_url}/api/tags", timeout=5)
            resp.raise_for_status()
        except httpx.HTTPError:
            logger.info(f"Waiting for Ollama... ({attempt + 1}/{attempts})")
            time.sleep(2)
            continue

        available = [m["name"] for m in resp.json().get("models", [])]
        missing = [w for w in wanted if not any(w in m for m in available)]
        if not missing:
            logger.info("All models are ready")
            return True
        logger.error(f"Missing models: {', '.join(missing)} (run `ollama pull <model>`)")
        return False

    logger.error("Ollama not available")
    return False


async def cmd_ingest(locators: list[str]) -> int:
    """Ingest each file or URL; stop at the first failure."""
    ingest_service = container.resolve(IngestService)
    total = 0
    for locator in locators:
        try:
            count = await ingest_service.ingest(locator)
        except (NoExtractableContentError, ValueError) as e:
            logger.error(f"Cannot ingest {locator}: {e}")
            return EXIT_CLIENT_ERROR
        total += count
    logger.info(f"Indexed {total} chunks from {len(locators)} source(s)")
    return EXIT_OK


async def cmd_ask(question: str) -> int:
    ask_service = container.resolve(AskService)
    if not question.strip():
        logger.error("Question is empty")
        return EXIT_CLIENT_ERROR

    try:
        answer = await ask_service.ask(question)
    except AnsweringModelError as e:
        logger.error(f"Answering failed: {e}")
        print(pick_fallback(int(time.time())))
        return EXIT_SERVER_ERROR

    print(answer)
    return EXIT_OK


async def cmd_search(question: str, top_k: int | None) -> int:
    ask_service = container.resolve(AskService)
    if not question.strip():
        logger.error("Question is empty")
        return EXIT_CLIENT_ERROR

    result = await ask_service.retrieve(question, top_k=top_k)
    print(result.context)
    return EXIT_OK


def cmd_sources() -> int:
    store = container.resolve(ChunkStoreProtocol)
    sources = store.list_sources()
    if not sources:
        print("No sources ingested yet.")
    for source_id, count in sources:
        print(f"{count:6d}  {source_id}")
    return EXIT_OK


def cmd_forget(source_id: str) -> int:
    store = container.resolve(ChunkStoreProtocol)
    deleted = store.delete_source(source_id)
    print(f"Deleted {deleted} chunk(s) for {source_id}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="rag-memory")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_ingest = sub.add_parser("ingest", help="ingest files or URLs")
    ap_ingest.add_argument("locators", nargs="+")

    ap_ask = sub.add_parser("ask", help="answer a question from memory")
    ap_ask.add_argument("question")

    ap_search = sub.add_parser("search", help="print the context block for a question")
    ap_search.add_argument("question")
    ap_search.add_argument("--top-k", type=int, default=None)

    sub.add_parser("sources", help="list ingested sources")

    ap_forget = sub.add_parser("forget", help="delete a source")
    ap_forget.add_argument("source_id")

    ap_check = sub.add_parser("check-model", help="check Ollama models are pulled")
    ap_check.add_argument("--attempts", type=int, default=30)

    return ap


def run(args: argparse.Namespace) -> int:
    if args.cmd == "check-model":
        return EXIT_OK if ollama_has_models(settings, args.attempts) else EXIT_SERVER_ERROR

    configure_container(settings)

    if args.cmd == "ingest":
        return asyncio.run(cmd_ingest(args.locators))
    if args.cmd == "ask":
        return asyncio.run(cmd_ask(args.question))
    if args.cmd == "search":
        return asyncio.run(cmd_search(args.question, args.top_k))
    if args.cmd == "sources":
        return cmd_sources()
    if args.cmd == "forget":
        return cmd_forget(args.source_id)

    raise SystemExit(f"Unknown command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    args = build_parser().parse_args(argv)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_SERVER_ERROR
    except RagMemoryError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_SERVER_ERROR


if __name__ == "__main__":
    sys.exit(main())
