from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from agents.evaluation.metrics import EvaluationResult, Metric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationCase:
    name: str
    input_prompt: str
    output: str


@dataclass
class CaseReport:
    case: EvaluationCase
    results: Dict[str, EvaluationResult] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results.values())

    def to_dict(self) -> dict:
        return {
            "name": self.case.name,
            "pass": self.passed,
            "results": {metric: r.to_dict() for metric, r in self.results.items()},
        }


@dataclass
class SuiteReport:
    cases: List[CaseReport] = field(default_factory=list)

    @property
    def pass_rate(self) -> float:
        if not self.cases:
            return 0.0
        return sum(1 for c in self.cases if c.passed) / len(self.cases)

    def to_dict(self) -> dict:
        return {
            "passRate": self.pass_rate,
            "cases": [c.to_dict() for c in self.cases],
        }


class EvaluationSuite:
    """Runs every metric over every case, sequentially and in order."""

    def __init__(self, metrics: Sequence[Metric]):
        if not metrics:
            raise ValueError("EvaluationSuite needs at least one metric")
        self.metrics = list(metrics)

    async def run(self, cases: Sequence[EvaluationCase]) -> SuiteReport:
        report = SuiteReport()
        for case in cases:
            case_report = CaseReport(case=case)
            for metric in self.metrics:
                case_report.results[metric.name] = await metric.evaluate(case.input_prompt, case.output)
            logger.info("evaluated case=%s pass=%s", case.name, case_report.passed)
            report.cases.append(case_report)
        logger.info("evaluation finished cases=%s pass_rate=%.2f", len(report.cases), report.pass_rate)
        return report
