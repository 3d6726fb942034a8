import asyncio
import logging
import time
from typing import AsyncIterator, List, Optional

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_ollama import ChatOllama

from agents.core.cancellation import CancellationToken
from agents.core.llm import LLM, GenerationChunk, GenerationRequest, GenerationResponse

logger = logging.getLogger("curriculum_architect.ollama")

DEFAULT_TIMEOUT = 120.0


class OllamaLLM(LLM):
    """
    Ollama-backed provider using LangChain's ChatOllama.

    A response schema on the request is forwarded as Ollama's ``format`` so the
    model is steered towards valid JSON; the caller still validates the text.
    """

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: float = DEFAULT_TIMEOUT,
        check_connection: bool = True,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.check_connection = check_connection

    def _chat(self, request: GenerationRequest) -> ChatOllama:
        kwargs = {
            "model": request.model or self.model,
            "temperature": request.temperature,
            "base_url": self.base_url,
        }
        if request.response_schema is not None:
            kwargs["format"] = request.response_schema
        return ChatOllama(**kwargs)

    @staticmethod
    def _messages(request: GenerationRequest) -> List[BaseMessage]:
        messages: List[BaseMessage] = []
        if request.system_instruction:
            messages.append(SystemMessage(content=request.system_instruction))
        messages.append(HumanMessage(content=request.prompt))
        return messages

    async def check_available(self) -> None:
        """Raise ConnectionError when the Ollama server is unreachable."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
        except httpx.HTTPError as e:
            logger.error("Ollama connection check failed: %s. Is Ollama running?", e)
            raise ConnectionError(
                f"Cannot connect to Ollama at {self.base_url}. "
                f"Please ensure Ollama is running: 'ollama serve'"
            ) from e
        if response.status_code != 200:
            raise ConnectionError(f"Ollama API returned status {response.status_code}")

    async def generate(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> GenerationResponse:
        if self.check_connection:
            await self.check_available()

        start_time = time.time()
        logger.debug("LLM call starting: ~%s input tokens", len(request.prompt) // 4)
        try:
            result = await asyncio.wait_for(
                self._chat(request).ainvoke(self._messages(request)),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            elapsed = time.time() - start_time
            logger.error("LLM call timed out after %.2fs (timeout: %ss)", elapsed, self.timeout)
            raise TimeoutError(
                f"LLM call timed out after {self.timeout}s. "
                f"The model may be too slow. Consider using a faster model."
            ) from None

        elapsed = time.time() - start_time
        text = _content_text(getattr(result, "content", None))
        logger.info(
            "LLM call completed in %.2fs (~%s out) cancelled=%s",
            elapsed,
            len(text or "") // 4,
            bool(cancel_token and cancel_token.cancelled),
        )
        if elapsed > 60:
            logger.warning("LLM call took %.2fs - consider a smaller model", elapsed)
        return GenerationResponse(text=text or None)

    async def stream(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[GenerationChunk]:
        if self.check_connection:
            await self.check_available()

        # LangChain astream yields message chunks; normalize to plain text.
        # Each chunk read is bounded by the call timeout.
        chunks = self._chat(request).astream(self._messages(request))
        start_time = time.time()
        try:
            while True:
                try:
                    chunk = await asyncio.wait_for(anext(chunks), timeout=self.timeout)
                except StopAsyncIteration:
                    return
                except asyncio.TimeoutError:
                    elapsed = time.time() - start_time
                    logger.error("LLM stream stalled after %.2fs (timeout: %ss)", elapsed, self.timeout)
                    raise TimeoutError(
                        f"LLM call timed out after {self.timeout}s. "
                        f"The model may be too slow. Consider using a faster model."
                    ) from None
                if cancel_token is not None and cancel_token.cancelled:
                    logger.info("stream stopped: token revoked (%s)", cancel_token.reason)
                    return
                text = _content_text(getattr(chunk, "content", None))
                if text:
                    yield GenerationChunk(text=text)
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()


def _content_text(content) -> Optional[str]:
    if content is None:
        return None
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # multi-part content: keep text parts only
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)
