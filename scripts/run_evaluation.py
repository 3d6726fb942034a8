#!/usr/bin/env python3
"""
Run the evaluation suite over recorded agent inputs/outputs.

Run: python scripts/run_evaluation.py cases.json
     python scripts/run_evaluation.py cases.json --judge --model qwen:latest -o report.json

Cases file: JSON list of {"name": str, "input": str, "output": str}.
Without --judge only JSON compliance is checked (no Ollama needed).
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
for _path in (_project_root, _project_root / "src"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


def load_cases(path: Path):
    from agents.evaluation.suite import EvaluationCase

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of cases")
    cases = []
    for i, item in enumerate(raw):
        output = item.get("output", "")
        if not isinstance(output, str):
            # recorded documents may be stored as objects; judge their serialized form
            output = json.dumps(output)
        cases.append(EvaluationCase(name=item.get("name") or f"case-{i + 1}", input_prompt=item["input"], output=output))
    return cases


def build_metrics(args: argparse.Namespace):
    from agents.evaluation.metrics import JsonComplianceMetric, RelevancyMetric

    metrics = [JsonComplianceMetric()]
    if args.judge:
        from infra.llm.ollama import OllamaLLM

        llm = OllamaLLM(model=args.model, base_url=args.base_url, timeout=args.timeout)
        metrics.append(RelevancyMetric(llm, model=args.model, threshold=args.threshold))
    return metrics


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate recorded agent outputs.")
    parser.add_argument("cases", type=Path, help="JSON file of evaluation cases")
    parser.add_argument("--judge", action="store_true", help="Also run the LLM-as-judge relevancy metric")
    parser.add_argument("--model", default="qwen:latest", help="Ollama model for the judge (default qwen:latest)")
    parser.add_argument("--base-url", default="http://localhost:11434", help="Ollama base URL")
    parser.add_argument("--timeout", type=float, default=120.0, help="Judge timeout in seconds (default 120)")
    parser.add_argument("--threshold", type=float, default=0.7, help="Relevancy pass threshold (default 0.7)")
    parser.add_argument("--min-pass-rate", type=float, default=1.0, help="Exit non-zero below this rate")
    parser.add_argument("--output", "-o", default=None, help="Write the report to a JSON file")
    args = parser.parse_args(argv)

    from agents.evaluation.suite import EvaluationSuite
    from api.utils.logger import configure_logging

    configure_logging()
    try:
        cases = load_cases(args.cases)
    except (OSError, ValueError, KeyError) as e:
        print(f"Cannot load cases: {e}", file=sys.stderr)
        return 2

    report = await EvaluationSuite(build_metrics(args)).run(cases)

    for case in report.cases:
        status = "PASS" if case.passed else "FAIL"
        details = ", ".join(f"{name}={r.score:.2f} ({r.reason})" for name, r in case.results.items())
        print(f"{status} {case.case.name}: {details}")
    print(f"\nPass rate: {report.pass_rate:.0%} ({len(report.cases)} cases)")

    if args.output:
        Path(args.output).write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        print(f"Saved to {args.output}")

    return 0 if report.pass_rate >= args.min_pass_rate else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
