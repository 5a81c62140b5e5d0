import asyncio
from typing import Any, List, Optional

from ibm_watsonx_ai import Credentials
from ibm_watsonx_ai.foundation_models import Embeddings as WXEmbeddings
from ibm_watsonx_ai.foundation_models import ModelInference
from ibm_watsonx_ai.metanames import GenTextParamsMetaNames as GenParams

from docqa.config import Settings
from docqa.models import GenerationParams
from docqa.rag.embeddings import EmbeddingClient, l2_normalize
from docqa.rag.generator import GeneratorClient, extract_generated_text


def _credentials(settings: Settings) -> Credentials:
    if not settings.ibm_cloud_api_key or not settings.watsonx_project_id:
        raise ValueError(
            "Missing watsonx.ai configuration. Please set IBM_CLOUD_API_KEY and WATSONX_PROJECT_ID."
        )
    return Credentials(
        api_key=settings.ibm_cloud_api_key,
        url=f"https://{settings.watsonx_region}.ml.cloud.ibm.com",
    )


def parse_query_embedding(result: Any) -> List[float]:
    data = result.get_result() if hasattr(result, "get_result") else result
    if isinstance(data, dict):
        # {"results": [{"embedding"|"vector"|"values": [...]}, ...]}
        if "results" in data and isinstance(data["results"], list) and data["results"]:
            first = data["results"][0]
            if isinstance(first, dict):
                for key in ("embedding", "vector", "values"):
                    if key in first:
                        return first[key]
        if "embedding" in data:
            return data["embedding"]
        if data.get("embeddings"):
            return data["embeddings"][0]
    # list-shaped: either a single vector or list of vectors
    if isinstance(data, list) and data:
        if isinstance(data[0], list):
            return data[0]
        if isinstance(data[0], (int, float)):
            return data
    if hasattr(result, "embedding"):
        return result.embedding
    raise RuntimeError(
        f"Unexpected query embedding response format from watsonx.ai: {type(data)} keys={list(data.keys()) if isinstance(data, dict) else 'n/a'}"
    )


class WatsonxEmbeddingClient(EmbeddingClient):
    def __init__(self, settings: Settings):
        super().__init__(settings.embedding_dim)
        self.settings = settings
        self.client: Optional[WXEmbeddings] = None

    async def load(self) -> None:
        if self.client is not None:
            return
        credentials = _credentials(self.settings)
        self.client = await asyncio.to_thread(
            WXEmbeddings,
            model_id=self.settings.watsonx_embed_model,
            project_id=self.settings.watsonx_project_id,
            credentials=credentials,
        )

    async def embed(
        self, text: str, pooling: str = "mean", normalize: bool = True
    ) -> List[float]:
        if self.client is None:
            raise RuntimeError("watsonx.ai embeddings not loaded")
        # pooling happens server side; the hosted models use mean pooling
        if pooling != "mean":
            raise ValueError(f"Unsupported pooling mode: {pooling}")
        result = await asyncio.to_thread(self.client.embed_query, text)
        vector = parse_query_embedding(result)
        return l2_normalize(vector) if normalize else list(vector)


class WatsonxGenerator(GeneratorClient):
    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[ModelInference] = None

    async def load(self) -> None:
        if self.client is not None:
            return
        credentials = _credentials(self.settings)
        self.client = await asyncio.to_thread(
            ModelInference,
            model_id=self.settings.watsonx_gen_model,
            project_id=self.settings.watsonx_project_id,
            credentials=credentials,
        )

    @staticmethod
    def build_params(params: GenerationParams) -> dict:
        gen_params = {
            GenParams.DECODING_METHOD: "sample" if params.do_sample else "greedy",
            GenParams.MAX_NEW_TOKENS: params.max_length,
            GenParams.REPETITION_PENALTY: float(params.repetition_penalty),
        }
        if params.do_sample:
            gen_params[GenParams.TEMPERATURE] = float(params.temperature)
        return gen_params

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        if self.client is None:
            raise RuntimeError("watsonx.ai model not loaded")
        response = await asyncio.to_thread(
            self.client.generate, prompt=prompt, params=self.build_params(params)
        )
        return extract_generated_text(response)
