from .classifier import (
    AnswerSet,
    QuizClassifier,
    QuizResultPayload,
    SkinProfile,
    build_result_payload,
    compute_profile,
    score_axes,
    summarize,
)
