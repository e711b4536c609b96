"""
Main runner for the intent matching engine.

This is the single entrypoint for scoring one event offline.

Usage:
    python -m intent_matching.run --config configs/config.yaml

The run performs the following steps:
1. Load and validate configuration
2. Load participants (synthetic participants if the file is missing)
3. Load pair similarities or derive them from embeddings (optional)
4. Resolve intent vectors and score every candidate pair
5. Build the evaluation report
6. Save all artifacts
"""

import argparse
import logging
import sys
from typing import Dict, Any, List, Optional, Tuple
from datetime import datetime

import numpy as np

from . import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_scoring(
    config_path: str,
    event_id: Optional[str] = None,
    output_dir: Optional[str] = None,
    n_jobs: Optional[int] = None
) -> Dict[str, Any]:
    """
    Run a complete scoring pass for one event.

    Args:
        config_path: Path to the configuration YAML file
        event_id: Event identifier to tag outputs with (overrides config)
        output_dir: If provided, write artifacts to this directory instead of config default
        n_jobs: Number of joblib workers (overrides config)

    Returns:
        Dictionary with run results and paths to artifacts
    """
    from .configs import load_config, validate_config
    from .data_loading import load_participants, load_similarities, load_embeddings
    from .embeddings import compute_embedding_similarities
    from .fusion import FusionConfig
    from .scoring import ScoringConfig, CompositeMatchScorer
    from .pair_generation import chunk_candidates
    from .evaluation import create_run_report
    from .artifacts import ArtifactManager

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("INTENT MATCHING RUN")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    global_config = config.get("global", {}) or {}
    data_config = config.get("data", {}) or {}
    output_config = config.get("output", {}) or {}

    setup_logging(global_config.get("log_level", "INFO"))

    event_id = event_id or global_config.get("event_id")
    n_jobs = n_jobs if n_jobs is not None else global_config.get("n_jobs", 1)
    batch_size = output_config.get("batch_size", 500)

    effective_output_dir = output_dir or global_config.get("output_dir", "artifacts")
    artifact_manager = ArtifactManager(effective_output_dir)

    # =========================================================================
    # 2. Load participants
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 1: Loading Participants")
    logger.info("=" * 60)

    try:
        participants = load_participants(data_config["participants"])
    except FileNotFoundError as e:
        logger.error(f"Participant data not found: {e}")
        logger.info("Creating synthetic participants for demonstration...")
        participants = _create_synthetic_participants()

    # =========================================================================
    # 3. Load embedding similarities (optional)
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 2: Loading Embedding Similarities")
    logger.info("=" * 60)

    participant_ids = [p.id for p in participants]
    similarities = _load_optional_similarities(
        data_config, participant_ids,
        load_similarities, load_embeddings, compute_embedding_similarities
    )

    # =========================================================================
    # 4. Score the event
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 3: Scoring Candidate Pairs")
    logger.info("=" * 60)

    scoring_config = ScoringConfig.from_config(config)
    fusion_config = FusionConfig.from_config(config)

    scorer = CompositeMatchScorer(
        scoring_config,
        fusion_config,
        n_jobs=n_jobs,
        batch_size=batch_size
    )
    result = scorer.score_event(participants, similarities)

    for rank, candidate in enumerate(result.candidates[:5], start=1):
        logger.info(f"  #{rank} {candidate.participant_a_id} <-> {candidate.participant_b_id} "
                    f"score={candidate.score:.2f} ({'; '.join(candidate.reasons)})")

    # =========================================================================
    # 5. Evaluation
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 4: Evaluation")
    logger.info("=" * 60)

    report = create_run_report(result, event_id=event_id)
    logger.info("\n" + report.summary())

    # =========================================================================
    # 6. Save artifacts
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 5: Saving Artifacts")
    logger.info("=" * 60)

    artifact_manager.save_matches(result.candidates, event_id=event_id)
    artifact_manager.save_participant_vectors(result.refreshed_vectors)
    artifact_manager.save_evaluation_report(report)

    scoring_config.save(str(artifact_manager.config_path("scoring_config.json")))
    fusion_config.save(str(artifact_manager.config_path("fusion_config.json")))

    n_batches = sum(1 for _ in chunk_candidates(result.candidates, batch_size))
    logger.info(f"Matches fit in {n_batches} insert batches of up to {batch_size}")

    metadata = {
        "engine_version": __version__,
        "run_timestamp": datetime.now().isoformat(),
        "config_path": config_path,
        "event_id": event_id,
        "n_jobs": n_jobs,
        "insert_batches": n_batches,
    }
    metadata.update(result.summary())
    artifact_manager.save_metadata(metadata)
    artifact_manager.save_yaml_config(config, "config_used")

    # =========================================================================
    # Summary
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("RUN COMPLETE")
    logger.info("=" * 60)

    artifacts = artifact_manager.list_artifacts()
    logger.info("\nArtifacts saved:")
    for category, files in artifacts.items():
        logger.info(f"  {category}/")
        for f in files:
            logger.info(f"    - {f}")

    return {
        "success": True,
        "output_dir": str(artifact_manager.output_dir),
        "artifacts": artifacts,
        "metadata": metadata,
        "result": result
    }


def _load_optional_similarities(
    data_config: Dict[str, Any],
    participant_ids: List[str],
    load_similarities,
    load_embeddings,
    compute_embedding_similarities
) -> Optional[Dict[Tuple[str, str], float]]:
    """
    Load the pair similarity map if the config points at one.

    A similarity table wins over raw embeddings. Missing files disable the
    embedding sub-score instead of failing the run.
    """
    similarities_path = data_config.get("similarities")
    embeddings_path = data_config.get("embeddings")

    try:
        if similarities_path:
            return load_similarities(similarities_path, participant_ids)
        if embeddings_path:
            ids, matrix = load_embeddings(embeddings_path)
            return compute_embedding_similarities(ids, matrix)
    except FileNotFoundError as e:
        logger.warning(f"Embedding data not found, scoring without embeddings: {e}")
        return None

    logger.info("No embedding data configured; embedding sub-score disabled")
    return None


def _create_synthetic_participants(n_participants: int = 40) -> List[Any]:
    """Create synthetic participants for demonstration when real data is unavailable."""
    from .intents import INTENT_KEYS
    from .profiles import ParticipantScoringProfile

    rng = np.random.RandomState(42)

    industries = ["Technology", "Finance", "Healthcare", "Retail", "Energy"]
    topics = ["AI", "SaaS", "Payments", "Cloud", "Data", "Security", "Robotics", "Marketing"]
    roles = ["attendee", "speaker", "sponsor", "exhibitor"]
    companies = ["Acme", "Globex", "Initech", "Umbrella", "Hooli", "Stark", "Wayne", "Wonka"]
    titles = ["Founder", "CTO", "VP Sales", "Investor", "Product Manager", "Engineer", "Analyst"]
    needs = ["funding", "customers", "partners", "mentorship", "talent", "suppliers"]

    participants = []
    for i in range(n_participants):
        n_intents = rng.randint(0, 3)
        intents = rng.choice(INTENT_KEYS, size=n_intents, replace=False)
        participants.append(ParticipantScoringProfile(
            id=f"p{i:03d}",
            full_name=f"Participant {i}",
            title=str(rng.choice(titles)),
            company_name=str(rng.choice(companies)),
            industry=str(rng.choice(industries)),
            expertise_areas=[str(t) for t in rng.choice(topics, size=rng.randint(0, 3), replace=False)],
            interests=[str(t) for t in rng.choice(topics, size=rng.randint(0, 3), replace=False)],
            role=str(rng.choice(roles)),
            looking_for=str(rng.choice(needs)),
            offering=str(rng.choice(needs)),
            intents=[str(intent) for intent in intents],
        ))

    logger.info(f"Created {len(participants)} synthetic participants")
    return participants


def main():
    """Main entry point for a scoring run."""
    parser = argparse.ArgumentParser(
        description="Score intent-based matches for one event"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--event-id",
        type=str,
        default=None,
        help="Event identifier to tag outputs with (overrides config)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for artifacts (overrides config)"
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=None,
        help="Number of parallel workers (overrides config)"
    )

    args = parser.parse_args()

    try:
        result = run_scoring(
            args.config,
            event_id=args.event_id,
            output_dir=args.output_dir,
            n_jobs=args.n_jobs
        )
        if result["success"]:
            logger.info("\nRun completed successfully!")
            return 0
        else:
            logger.error("\nRun failed!")
            return 1
    except Exception as e:
        logger.exception(f"Run failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
