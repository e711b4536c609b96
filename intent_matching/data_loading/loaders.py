"""
Data loading functions for the intent matching engine.

This module reads participant records, precomputed pair similarities and
raw profile embeddings from disk. No scoring is done here - loaders only
turn files into the shapes the scorer consumes.

Supported formats:
- participants: JSON (a list of records, or {"participants": [...]}) or CSV
  where list columns (intents, expertise_areas, interests) are ";"-separated
- similarities: CSV with participant_a, participant_b, similarity in [0, 1]
- embeddings: CSV with a participant_id column followed by numeric columns
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Iterable, Tuple

import numpy as np
import pandas as pd

from ..profiles import ParticipantScoringProfile
from ..pair_generation import canonical_pair_key

logger = logging.getLogger(__name__)

LIST_COLUMNS = ["intents", "expertise_areas", "interests"]
LIST_SEPARATOR = ";"

SIMILARITY_COLUMNS = ["participant_a", "participant_b", "similarity"]


def _check_exists(filepath: str, what: str) -> Path:
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"{what} file not found: {filepath}")
    return path


def _split_list(value: Any) -> List[str]:
    """Split a ";"-separated CSV cell into a list of stripped items."""
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return []
    return [item.strip() for item in str(value).split(LIST_SEPARATOR) if item.strip()]


def _records_from_csv(path: Path) -> List[Dict[str, Any]]:
    df = pd.read_csv(path, dtype={"id": str})
    if df.empty:
        raise ValueError(f"Participants file is empty: {path}")

    for column in LIST_COLUMNS:
        if column in df.columns:
            df[column] = df[column].apply(_split_list)

    # NaN -> None so optional fields stay unset
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def _records_from_json(path: Path) -> List[Dict[str, Any]]:
    with open(path, "r") as f:
        content = f.read()
    if not content.strip():
        raise ValueError(f"Participants file is empty: {path}")

    data = json.loads(content)
    if isinstance(data, dict):
        data = data.get("participants", [])
    if not isinstance(data, list):
        raise ValueError(f"Participants file must contain a list of records: {path}")
    if not data:
        raise ValueError(f"Participants file has no records: {path}")
    return data


def load_participants(filepath: str) -> List[ParticipantScoringProfile]:
    """
    Load participant records for one event.

    Args:
        filepath: Path to a .json or .csv participants file

    Returns:
        List of ParticipantScoringProfile in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or a record has no id
    """
    path = _check_exists(filepath, "Participants")
    logger.info(f"Loading participants from {filepath}")

    if path.suffix.lower() == ".csv":
        records = _records_from_csv(path)
    else:
        records = _records_from_json(path)

    participants = [ParticipantScoringProfile.from_dict(record) for record in records]
    logger.info(f"Loaded {len(participants)} participants")
    return participants


def load_similarities(
    filepath: str,
    participant_ids: Optional[Iterable[str]] = None
) -> Dict[Tuple[str, str], float]:
    """
    Load precomputed embedding similarities keyed by canonical pair.

    Args:
        filepath: Path to the similarity CSV
        participant_ids: Known participant ids; rows referencing other ids
            are kept but reported

    Returns:
        Dictionary mapping (smaller id, larger id) -> similarity

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, lacks columns, or a similarity is
            outside [0, 1]
    """
    _check_exists(filepath, "Similarity")
    logger.info(f"Loading pair similarities from {filepath}")
    df = pd.read_csv(filepath, dtype={"participant_a": str, "participant_b": str})

    if df.empty:
        raise ValueError(f"Similarity file is empty: {filepath}")

    missing = [c for c in SIMILARITY_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Similarity file is missing columns: {missing}")

    values = df["similarity"].astype(float)
    out_of_range = df[(values < 0) | (values > 1) | values.isna()]
    if not out_of_range.empty:
        raise ValueError(
            f"Similarity values must be in [0, 1]; {len(out_of_range)} rows are not "
            f"(first: {out_of_range.iloc[0].to_dict()})"
        )

    known = set(str(pid) for pid in participant_ids) if participant_ids is not None else None
    similarities = {}
    unknown_rows = 0
    for id_a, id_b, value in zip(df["participant_a"], df["participant_b"], values):
        if known is not None and (id_a not in known or id_b not in known):
            unknown_rows += 1
        similarities[canonical_pair_key(id_a, id_b)] = float(value)

    if unknown_rows:
        logger.warning(f"{unknown_rows} similarity rows reference unknown participants")

    logger.info(f"Loaded {len(similarities)} pair similarities")
    return similarities


def load_embeddings(filepath: str) -> Tuple[List[str], np.ndarray]:
    """
    Load per-participant embedding vectors.

    Args:
        filepath: Path to the embeddings CSV

    Returns:
        Tuple of (participant ids, embedding matrix of shape (n, d))

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no participant_id column
    """
    _check_exists(filepath, "Embeddings")
    logger.info(f"Loading embeddings from {filepath}")
    df = pd.read_csv(filepath, dtype={"participant_id": str})

    if df.empty:
        raise ValueError(f"Embeddings file is empty: {filepath}")
    if "participant_id" not in df.columns:
        raise ValueError(f"Embeddings file has no participant_id column: {filepath}")

    ids = df["participant_id"].tolist()
    matrix = df.drop(columns=["participant_id"]).to_numpy(dtype=float)

    logger.info(f"Loaded {len(ids)} embeddings of dimension {matrix.shape[1]}")
    return ids, matrix
