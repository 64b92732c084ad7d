"""
Persistence of analysis results as JSON and as a plain-text report.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import Config
from ..models import AnalysisResult
from ..logger import get_logger

logger = get_logger(__name__)

ResultLike = Union[AnalysisResult, Dict[str, Any]]


def _as_dict(result: ResultLike) -> Dict[str, Any]:
    if isinstance(result, AnalysisResult):
        return result.to_dict()
    return dict(result)


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def _join_or_none(values: Optional[List[str]]) -> str:
    return ", ".join(values) if values else "None"


def format_result(result: Dict[str, Any], index: int) -> str:
    """Human-readable block for one result."""
    lines = [
        f"==== Result #{index} ====",
        f'Query: "{result.get("originalText", result.get("query", ""))}"',
        f"Product Type: {result.get('productType') or 'Unknown'}",
        f"Features: {_join_or_none(result.get('features'))}",
        f"Styles: {_join_or_none(result.get('styles'))}",
        f"Places: {_join_or_none(result.get('places'))}",
    ]

    if result.get("brandName"):
        lines.append(f"Brand: {result['brandName']}")
    if result.get("productName"):
        lines.append(f"Product: {result['productName']}")

    details = result.get("matchDetails")
    if details:
        lines.append(
            f'Match Details: "{details["word"]}" -> "{details["match"]}" -> "{details["canonicalForm"]}" '
            f'({details["algorithm"]}, score: {details["score"]:.3f})'
        )

    lines.append(f"Confidence: {float(result.get('confidence', 0.0)):.3f}")
    return "\n".join(lines)


class ResultsFileHandler:
    """
    Writes batches of analysis results to an output folder.

    Example:
        handler = ResultsFileHandler("results")
        paths = handler.save(analyzer.analyze_batch(queries))
    """

    def __init__(self, output_dir: Optional[Union[str, Path]] = None, default_filename: str = "analysis_results"):
        self.output_dir = Path(output_dir) if output_dir is not None else Path(Config.RESULTS_DIR)
        self.default_filename = default_filename

        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created output directory: {self.output_dir}")

    def _path(self, filename: Optional[str], suffix: str) -> Path:
        return self.output_dir / (filename or f"{self.default_filename}_{_timestamp()}{suffix}")

    def save_json(self, results: Sequence[ResultLike], filename: Optional[str] = None) -> Path:
        """
        Save results as a JSON array.

        Args:
            results: AnalysisResult objects or their dict form
            filename: File name inside output_dir (timestamped if omitted)

        Returns:
            Path of the written file
        """
        path = self._path(filename, ".json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump([_as_dict(r) for r in results], f, indent=2, ensure_ascii=False)

        logger.info(f"Analysis results saved to: {path}")
        return path

    def save_text(self, results: Sequence[ResultLike], filename: Optional[str] = None) -> Path:
        """Save results as a plain-text report."""
        path = self._path(filename, ".txt")
        blocks = [format_result(_as_dict(r), i) for i, r in enumerate(results, start=1)]

        with open(path, "w", encoding="utf-8") as f:
            f.write("\n\n".join(blocks))

        logger.info(f"Analysis report saved to: {path}")
        return path

    def save(self, results: Sequence[ResultLike], base_filename: Optional[str] = None) -> Dict[str, Path]:
        """
        Save both the JSON file and the text report under one base name.

        Returns:
            {"json": json_path, "text": text_path}
        """
        base = base_filename or f"{self.default_filename}_{_timestamp()}"
        return {
            "json": self.save_json(results, f"{base}.json"),
            "text": self.save_text(results, f"{base}.txt"),
        }
