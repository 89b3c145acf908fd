
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    db_path: str = "rag_memories.db"

    llm_base_url: str = "http://localhost:11434/v1"
    llm_model: str = "llama3.1:8b"
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.1

    # "ollama" or "sentence_transformers"
    embedding_backend: str = "ollama"
    embedding_model: str = "nomic-embed-text"
    embedding_base_url: str | None = None

    chunk_size: int = 1200
    chunk_overlap: int = 150
    ingest_concurrency: int = 1

    rag_top_k: int = 6
    rag_max_context_chars: int = 12_000

    web_timeout: float = 30.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
