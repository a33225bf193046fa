"""
Pipeline driver: Configure -> Ingest -> Retrieve -> Generate -> Done, once per sample run.
No branching and no retries; any fault aborts the run and propagates to the caller.
"""

from enum import Enum
from typing import Callable, Optional, Sequence

from .config import ConfigurationSource, SampleVariant, Settings, get_token
from .errors import ServiceUnavailable
from .factory import create_chat_client, create_embedding_client, create_ollama_client, create_openai_client
from .ingestion import ingest
from .prompt import DEFAULT_SUBJECT, build_prompt
from .samples import EXTERNAL_DATA, sample_query
from .search_service import semantic_search
from ..agents.agent import BaseChatAgent
from ..util.logging import logger
from ..vector.embeddings import IEmbeddingProvider
from ..vector.index import IVectorCollection, InMemoryVectorStore


class PipelineStage(str, Enum):
    CONFIGURE = "configure"
    INGEST = "ingest"
    RETRIEVE = "retrieve"
    GENERATE = "generate"
    DONE = "done"


class RagPipeline:
    """
    Runs ingestion, retrieval, prompt assembly and generation in a fixed order.

    The current stage is exposed as `stage` so a failure can be attributed.
    """

    def __init__(self, collection: IVectorCollection, embedding_client: IEmbeddingProvider,
                 chat_client: BaseChatAgent, echo: Callable[[str], None] = print, top_k: int = 5,
                 ingest_workers: int = 1, subject: str = DEFAULT_SUBJECT):
        self.collection = collection
        self.embedding_client = embedding_client
        self.chat_client = chat_client
        self.echo = echo
        self.top_k = top_k
        self.ingest_workers = ingest_workers
        self.subject = subject
        self.stage = PipelineStage.CONFIGURE

    def _enter(self, stage: PipelineStage) -> None:
        logger.log_pipeline_stage(self.stage.value, "completed")
        self.stage = stage
        if stage != PipelineStage.DONE:
            logger.log_pipeline_stage(stage.value, "started")

    def run(self, texts: Sequence[str], query: str, product_id: Optional[int] = None) -> str:
        """
        Execute one run and return the generated text.

        Args:
            texts: Facts to ingest, one record per text
            query: The user question
            product_id: Product tag retrieval is restricted to (None = untagged records)
        """
        try:
            self._enter(PipelineStage.INGEST)
            ingest(self.collection, self.embedding_client, texts, echo=self.echo,
                   max_workers=self.ingest_workers)

            self._enter(PipelineStage.RETRIEVE)
            results = semantic_search(self.collection, self.embedding_client, query,
                                      product_id=product_id, top_k=self.top_k)

            self._enter(PipelineStage.GENERATE)
            prompt = build_prompt(results, query, subject=self.subject, echo=self.echo)
            answer = self.chat_client.generate(prompt)
            self.echo(answer)

            self._enter(PipelineStage.DONE)
            return answer
        except Exception as e:
            if isinstance(e, ServiceUnavailable) and e.stage is None:
                e.stage = self.stage.value
            logger.log_pipeline_stage(self.stage.value, "failed", {
                "error_type": type(e).__name__,
                "error": str(e)
            })
            raise


def run_sample(variant: SampleVariant, settings: Settings, source: Optional[ConfigurationSource] = None,
               echo: Callable[[str], None] = print, store: Optional[InMemoryVectorStore] = None,
               _chat_client: Optional[BaseChatAgent] = None,
               _embedding_client: Optional[IEmbeddingProvider] = None) -> str:
    """
    Run one hard-coded sample end to end.

    The hosted variant resolves its token first, so a missing token raises
    ConfigurationError before any client is built or any request is sent.

    Args:
        variant: Which backend to use
        settings: Application settings
        source: Layered configuration source (defaults to settings.configuration_source())
        echo: Sink for the console echoes
        store: Vector store to create the collection in (a fresh one by default)
        _chat_client: Optional chat client for testing
        _embedding_client: Optional embedding client for testing

    Returns:
        The generated text
    """
    logger.log_pipeline_stage(PipelineStage.CONFIGURE.value, "started", {"variant": variant.value})

    try:
        token = None
        sdk_client = None
        if variant == SampleVariant.HOSTED:
            token = get_token(source if source is not None else settings.configuration_source())
            if _chat_client is None or _embedding_client is None:
                sdk_client = create_openai_client(settings, token)
        elif _chat_client is None or _embedding_client is None:
            sdk_client = create_ollama_client(settings)

        chat_client = _chat_client if _chat_client is not None else create_chat_client(
            variant, settings, token, _client=sdk_client)
        embedding_client = _embedding_client if _embedding_client is not None else create_embedding_client(
            variant, settings, token, _client=sdk_client)
    except Exception as e:
        logger.log_pipeline_stage(PipelineStage.CONFIGURE.value, "failed", {
            "error_type": type(e).__name__,
            "error": str(e)
        })
        raise

    store = store if store is not None else InMemoryVectorStore()
    collection = store.get_collection(settings.collection_name, embedding_client.get_dimension()).ensure_exists()

    pipeline = RagPipeline(
        collection,
        embedding_client,
        chat_client,
        echo=echo,
        top_k=settings.top_k,
        ingest_workers=settings.ingest_workers,
    )
    return pipeline.run(EXTERNAL_DATA, sample_query(variant))
