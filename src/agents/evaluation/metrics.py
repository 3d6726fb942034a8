from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional

from agents.core.llm import LLM, GenerationRequest
from agents.core.prompt_builder import PromptTemplate

logger = logging.getLogger(__name__)

RELEVANCY_THRESHOLD = 0.7

RELEVANCY_SCHEMA = {
    "type": "object",
    "properties": {
        "score": {"type": "number"},
        "reason": {"type": "string"},
    },
    "required": ["score", "reason"],
}

JUDGE_TEMPLATE = PromptTemplate(
    """You are an AI Evaluator.

Original User Request: "{input}"

AI Generated Output:
{output}

Task:
Evaluate if the generated output directly and accurately addresses the user's request.
Ignore JSON formatting issues (those are checked elsewhere).
Focus on the content.

Return a JSON response:
{{
  "score": number, // 0.0 to 1.0
  "reason": "string explanation"
}}
"""
)


@dataclass(frozen=True)
class EvaluationResult:
    score: float
    reason: str
    passed: bool

    def to_dict(self) -> dict:
        data = asdict(self)
        data["pass"] = data.pop("passed")
        return data


class Metric(ABC):
    """Stateless checker: ``evaluate(input_prompt, raw_output)`` never raises."""

    name: str = "metric"

    @abstractmethod
    async def evaluate(self, input_prompt: str, raw_output: str) -> EvaluationResult:
        raise NotImplementedError


class JsonComplianceMetric(Metric):
    """Syntactic check: the output parses as a JSON object or array."""

    name = "json_compliance"

    async def evaluate(self, input_prompt: str, raw_output: str) -> EvaluationResult:
        try:
            parsed = json.loads(raw_output)
        except (json.JSONDecodeError, TypeError):
            return EvaluationResult(score=0.0, reason="Failed to parse JSON", passed=False)
        if not isinstance(parsed, (dict, list)):
            return EvaluationResult(score=0.0, reason="Output is not a JSON object", passed=False)
        return EvaluationResult(score=1.0, reason="Valid JSON", passed=True)


class RelevancyMetric(Metric):
    """
    Semantic check using the provider as a judge. Passes when the judge's score
    exceeds ``threshold``; any provider or parse failure is a failing result.
    """

    name = "relevancy"

    def __init__(self, llm: LLM, model: Optional[str] = None, threshold: float = RELEVANCY_THRESHOLD):
        self.llm = llm
        self.model = model
        self.threshold = threshold

    def build_prompt(self, input_prompt: str, raw_output: str) -> str:
        return JUDGE_TEMPLATE.render(input=input_prompt, output=raw_output)

    async def evaluate(self, input_prompt: str, raw_output: str) -> EvaluationResult:
        request = GenerationRequest(
            prompt=self.build_prompt(input_prompt, raw_output),
            temperature=0.0,
            response_schema=RELEVANCY_SCHEMA,
            model=self.model,
        )
        try:
            response = await self.llm.generate(request)
            verdict = json.loads(response.text or "{}")
            score = float(verdict["score"])
            reason = str(verdict.get("reason", ""))
        except Exception as e:  # judge failures must not abort an evaluation run
            logger.error("relevancy evaluation failed: %s", e)
            return EvaluationResult(score=0.0, reason="Evaluation Error", passed=False)

        score = min(max(score, 0.0), 1.0)
        return EvaluationResult(score=score, reason=reason, passed=score > self.threshold)
