from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from typing import List, Dict, Optional


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Finding catalog ---

class SubFeature(_Frozen):
    name: str
    findings: List[str]


class Category(_Frozen):
    name: str
    key: str
    description: str = ""
    sub_features: List[SubFeature]


class Area(_Frozen):
    name: str
    findings: List[str]


class Theme(_Frozen):
    label: str
    findings: List[str]


class AreaThemes(_Frozen):
    area: str
    themes: List[Theme]


class FindingCatalog(_Frozen):
    version: str
    categories: List[Category]
    areas: List[Area]
    area_themes: List[AreaThemes] = Field(default_factory=list)


# --- Quiz definition ---

class Axis(_Frozen):
    id: str
    label: str
    description: str = ""
    tendency_advice: Optional[str] = None


class Answer(_Frozen):
    label: str
    weights: Dict[str, PositiveInt] = Field(default_factory=dict)  # {axis_id: points}


class Question(_Frozen):
    id: str
    title: str = ""
    text: str
    answers: List[Answer]


class QuizDefinition(_Frozen):
    version: str
    axes: List[Axis] = Field(min_length=1)
    questions: List[Question]
    recommendations: Dict[str, List[str]] = Field(default_factory=dict)  # {axis_id: [item ids]}
