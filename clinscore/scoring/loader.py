"""
Score Definition Loader
=======================

Loads clinical score definitions from YAML files into a ScoreLibrary.

Directory layout (any depth):

    scores/
        cardiology/cha2ds2_va.yaml
        nephrology/kfre.yaml

The score id is the file stem. Paths containing ``template`` are skipped.
A file that fails to load is logged and skipped so one broken definition
does not take the whole library down.

Usage:
    from clinscore.scoring.loader import load_all_scores

    library = load_all_scores("scores/")
    definition = library.get_score("cha2ds2_va")

Author: ClinScore Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from shared.schemas.definitions import ScoreDefinition, Specialty


logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

PathLike = Union[str, Path]


class ScoreLoadError(Exception):
    """Base exception for definition loading errors."""

    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"{reason} ({path})")
        self.path = str(path)
        self.reason = reason


class ScoresDirectoryNotFound(ScoreLoadError):
    """Raised when the scores directory does not exist."""

    def __init__(self, path: PathLike):
        super().__init__(path, "No scores directory found")


class ScoreFileError(ScoreLoadError):
    """Raised when a file cannot be read or is not valid YAML."""
    pass


class InvalidScoreDefinition(ScoreLoadError):
    """Raised when a definition is structurally invalid."""
    pass


class UnknownScore(LookupError):
    """Raised when a score id is not in the library."""

    def __init__(self, score_id: str):
        super().__init__(f"Score not found: {score_id}")
        self.score_id = score_id


@dataclass
class ScoreLibrary:
    """Loaded score definitions, keyed by score id and indexed by specialty."""
    scores: Dict[str, ScoreDefinition] = field(default_factory=dict)
    by_specialty: Dict[Specialty, List[str]] = field(default_factory=dict)
    source_path: Optional[Path] = None

    def add(self, score_id: str, definition: ScoreDefinition) -> None:
        self.scores[score_id] = definition
        self.by_specialty.setdefault(definition.specialty, []).append(score_id)

    def get_score(self, score_id: str) -> Optional[ScoreDefinition]:
        """Get a score by its id."""
        return self.scores.get(score_id)

    def require_score(self, score_id: str) -> ScoreDefinition:
        definition = self.scores.get(score_id)
        if definition is None:
            raise UnknownScore(score_id)
        return definition

    def get_scores_for_specialty(self, specialty: Specialty) -> List[ScoreDefinition]:
        """Get all scores for a specialty, in load order."""
        return [self.scores[sid] for sid in self.by_specialty.get(specialty, [])]

    def get_specialties(self) -> List[Specialty]:
        """Get all specialties with at least one score, sorted by name."""
        return sorted(self.by_specialty, key=lambda s: s.value)

    def score_ids(self) -> List[str]:
        return sorted(self.scores)

    def count(self) -> int:
        return len(self.scores)


# =============================================================================
# Validation
# =============================================================================


def validate_score(definition: ScoreDefinition, path: PathLike) -> None:
    """
    Check structural invariants the calculation engine relies on.

    Raises:
        InvalidScoreDefinition: On the first violated invariant
    """
    if not definition.name.strip():
        raise InvalidScoreDefinition(path, "Score name is empty")
    if not definition.inputs:
        raise InvalidScoreDefinition(path, "Score must have at least one input field")
    if not definition.interpretation:
        raise InvalidScoreDefinition(path, "Score must have at least one interpretation rule")

    seen = set()
    for i, input_field in enumerate(definition.inputs):
        if not input_field.field.strip():
            raise InvalidScoreDefinition(path, f"Input field {i} has empty field name")
        if not input_field.label.strip():
            raise InvalidScoreDefinition(
                path, f"Input field '{input_field.field}' has empty label"
            )
        if input_field.field in seen:
            raise InvalidScoreDefinition(path, f"Duplicate field name: '{input_field.field}'")
        seen.add(input_field.field)


# =============================================================================
# Loading
# =============================================================================


def parse_score(text: str, path: PathLike = "<string>") -> ScoreDefinition:
    """
    Parse and validate a definition from YAML text.

    Raises:
        ScoreFileError: Invalid YAML or not a mapping
        InvalidScoreDefinition: Schema or invariant violation
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ScoreFileError(path, f"Failed to parse YAML: {e}") from e

    if not isinstance(data, dict):
        raise ScoreFileError(path, "Score definition must be a YAML mapping")

    try:
        definition = ScoreDefinition.model_validate(data)
    except ValidationError as e:
        raise InvalidScoreDefinition(path, f"Invalid score definition: {e}") from e

    validate_score(definition, path)
    return definition


def load_score_from_file(file_path: PathLike) -> ScoreDefinition:
    """
    Load a single score definition from a YAML file.

    Raises:
        ScoreLoadError: If the file cannot be read, parsed or validated
    """
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ScoreFileError(file_path, f"Failed to read file: {e}") from e
    return parse_score(text, file_path)


def find_yaml_files(directory: PathLike) -> List[Path]:
    """Recursively find all .yaml/.yml files, sorted for stable load order."""
    return sorted(
        p for p in Path(directory).rglob("*")
        if p.is_file() and p.suffix in YAML_SUFFIXES
    )


def load_all_scores(scores_dir: PathLike) -> ScoreLibrary:
    """
    Load every score definition below a directory.

    Raises:
        ScoresDirectoryNotFound: If the directory does not exist
    """
    scores_dir = Path(scores_dir)
    if not scores_dir.is_dir():
        raise ScoresDirectoryNotFound(scores_dir)

    library = ScoreLibrary(source_path=scores_dir)
    for file_path in find_yaml_files(scores_dir):
        if "template" in str(file_path.relative_to(scores_dir)):
            continue

        try:
            definition = load_score_from_file(file_path)
        except ScoreLoadError as e:
            logger.warning(f"Failed to load score from {file_path}: {e.reason}")
            continue

        score_id = file_path.stem
        if score_id in library.scores:
            logger.warning(f"Duplicate score id '{score_id}' in {file_path}, skipped")
            continue
        library.add(score_id, definition)

    logger.info(f"Loaded {library.count()} scores from {scores_dir}")
    return library
