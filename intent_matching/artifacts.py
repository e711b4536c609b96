"""
Artifact management for scoring runs.

All run outputs go under one output directory:

    <output_dir>/
        matches.csv                 surviving candidates, best first
        participant_vectors.json    refreshed (recomputed) vector cache entries
        evaluation_report.json      RunReport
        metadata.json               run metadata
        config_used.yaml            the configuration the run used
        configs/                    resolved ScoringConfig / FusionConfig (JSON)
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence

import pandas as pd
import yaml

from .scoring import MatchCandidate
from .evaluation import RunReport

logger = logging.getLogger(__name__)

REASON_SEPARATOR = " | "

MATCH_COLUMNS = [
    "event_id",
    "participant_a_id",
    "participant_b_id",
    "score",
    "intent_score",
    "industry_score",
    "interest_score",
    "complementarity_score",
    "embedding_score",
    "match_reasons",
]


class ArtifactManager:
    """
    Writes the outputs of a scoring run to disk.

    Attributes:
        output_dir: Root directory for all artifacts
    """

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        (self.output_dir / "configs").mkdir(exist_ok=True)

    def save_matches(
        self,
        candidates: Sequence[MatchCandidate],
        event_id: Optional[str] = None,
        filename: str = "matches.csv"
    ) -> Path:
        """Save candidates as CSV; reasons are joined into one column."""
        rows = []
        for candidate in candidates:
            record = candidate.to_record(event_id)
            record["match_reasons"] = REASON_SEPARATOR.join(record["match_reasons"])
            rows.append(record)

        path = self.output_dir / filename
        pd.DataFrame(rows, columns=MATCH_COLUMNS).to_csv(path, index=False)
        logger.info(f"Saved {len(rows)} matches to {path}")
        return path

    def save_participant_vectors(
        self,
        vectors: Dict[str, Dict[str, Any]],
        filename: str = "participant_vectors.json"
    ) -> Path:
        """Save refreshed vector cache entries keyed by participant id."""
        path = self.output_dir / filename
        with open(path, "w") as f:
            json.dump(vectors, f, indent=2, sort_keys=True)
        logger.info(f"Saved {len(vectors)} refreshed intent vectors to {path}")
        return path

    def save_evaluation_report(self, report: RunReport, filename: str = "evaluation_report.json") -> Path:
        path = self.output_dir / filename
        report.save(str(path))
        return path

    def save_metadata(self, metadata: Dict[str, Any], filename: str = "metadata.json") -> Path:
        path = self.output_dir / filename
        with open(path, "w") as f:
            json.dump(metadata, f, indent=2, default=str)
        logger.info(f"Saved metadata to {path}")
        return path

    def save_yaml_config(self, config: Dict[str, Any], name: str = "config_used") -> Path:
        path = self.output_dir / f"{name}.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
        logger.info(f"Saved configuration to {path}")
        return path

    def config_path(self, filename: str) -> Path:
        """Path for a resolved config file under configs/."""
        return self.output_dir / "configs" / filename

    def list_artifacts(self) -> Dict[str, List[str]]:
        """List saved files grouped by directory ("." for the root)."""
        artifacts = {}
        for path in sorted(self.output_dir.rglob("*")):
            if path.is_file():
                category = str(path.parent.relative_to(self.output_dir))
                artifacts.setdefault(category, []).append(path.name)
        return artifacts
