"""
Offline evaluation of agent output: structural compliance and LLM-as-judge relevancy.
"""

from agents.evaluation.metrics import (
    EvaluationResult,
    JsonComplianceMetric,
    Metric,
    RelevancyMetric,
)
from agents.evaluation.suite import EvaluationCase, EvaluationSuite, SuiteReport

__all__ = [
    "EvaluationResult",
    "JsonComplianceMetric",
    "Metric",
    "RelevancyMetric",
    "EvaluationCase",
    "EvaluationSuite",
    "SuiteReport",
]
