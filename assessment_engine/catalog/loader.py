import logging
import yaml
from pydantic import ValidationError
from typing import Dict, Any, Callable, TypeVar

from assessment_engine.catalog.models import FindingCatalog, QuizDefinition
from assessment_engine.errors import CatalogValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_unique(values, what: str, scope: str = "") -> None:
    seen = set()
    for value in values:
        if value in seen:
            where = f" in {scope}" if scope else ""
            raise CatalogValidationError(f"Duplicate {what} found{where}: {value}")
        seen.add(value)


def load_finding_catalog_data(data: Dict[str, Any]) -> FindingCatalog:
    """
    Validates the raw dictionary data against the FindingCatalog model
    and performs additional custom validations.
    """
    try:
        catalog = FindingCatalog.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    _check_unique((c.key for c in catalog.categories), "category key")
    for category in catalog.categories:
        _check_unique((s.name for s in category.sub_features), "sub-feature name", f"category '{category.key}'")

    # Area names are matched case-insensitively by the scorer
    _check_unique((a.name.lower() for a in catalog.areas), "area name")
    area_names = {a.name.lower() for a in catalog.areas}

    _check_unique((t.area.lower() for t in catalog.area_themes), "theme group for area")
    for group in catalog.area_themes:
        if group.area.lower() not in area_names:
            raise CatalogValidationError(f"Themes declared for unknown area: {group.area}")
        _check_unique((t.label for t in group.themes), "theme label", f"area '{group.area}'")

    # Findings may legitimately repeat across sub-features and themes; no dedup here.
    return catalog


def load_quiz_definition_data(data: Dict[str, Any]) -> QuizDefinition:
    """
    Validates the raw dictionary data against the QuizDefinition model.
    Weights must reference declared axes.
    """
    try:
        definition = QuizDefinition.model_validate(data)
    except ValidationError as e:
        raise e

    _check_unique((a.id for a in definition.axes), "axis ID")
    _check_unique((q.id for q in definition.questions), "question ID")

    axis_ids = {a.id for a in definition.axes}
    for question in definition.questions:
        for index, answer in enumerate(question.answers):
            unknown = set(answer.weights) - axis_ids
            if unknown:
                raise CatalogValidationError(
                    f"Answer {index} of question '{question.id}' weights unknown axes: {sorted(unknown)}"
                )

    for axis_id in definition.recommendations:
        if axis_id not in axis_ids:
            raise CatalogValidationError(f"Recommendations declared for unknown axis: {axis_id}")

    return definition


def _load_yaml(file_path: str) -> Dict[str, Any]:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise CatalogValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise CatalogValidationError(f"YAML file is empty or invalid: {file_path}")
    if not isinstance(data, dict):
        raise CatalogValidationError(f"YAML file must contain a mapping at the top level: {file_path}")
    return data


def _load_from_file(file_path: str, parse: Callable[[Dict[str, Any]], T], what: str) -> T:
    loaded = parse(_load_yaml(file_path))
    logger.info(f"Loaded {what} version {loaded.version} from {file_path}")
    return loaded


def load_finding_catalog_from_file(file_path: str) -> FindingCatalog:
    """
    Loads a finding catalog from a YAML file, validates it,
    and returns a FindingCatalog object.
    """
    return _load_from_file(file_path, load_finding_catalog_data, "finding catalog")


def load_quiz_definition_from_file(file_path: str) -> QuizDefinition:
    """
    Loads a quiz definition from a YAML file, validates it,
    and returns a QuizDefinition object.
    """
    return _load_from_file(file_path, load_quiz_definition_data, "quiz definition")
