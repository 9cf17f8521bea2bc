from .models import (
    Answer,
    Area,
    AreaThemes,
    Axis,
    Category,
    FindingCatalog,
    Question,
    QuizDefinition,
    SubFeature,
    Theme,
)
from .loader import (
    load_finding_catalog_data,
    load_finding_catalog_from_file,
    load_quiz_definition_data,
    load_quiz_definition_from_file,
)
