import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import exam_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_toolkit.core.models import DifficultyTier, Question, QuestionCategory  # noqa: E402


def _make_question(
    qid: str,
    category: QuestionCategory = QuestionCategory.SINGLE_CHOICE,
    difficulty: DifficultyTier = DifficultyTier.EASY,
    canonical_answer: str = "A",
    options=("Option A", "Option B", "Option C", "Option D"),
    knowledge_points=(),
    tags=(),
) -> Question:
    if not category.is_select:
        options = ()
    return Question(
        id=qid,
        category=category,
        difficulty=difficulty,
        canonical_answer=canonical_answer,
        options=options,
        knowledge_points=frozenset(knowledge_points),
        tags=frozenset(tags),
    )


# Common test fixtures
@pytest.fixture
def make_question():
    """Return a factory for test questions."""
    return _make_question


@pytest.fixture
def mixed_pool() -> list[Question]:
    """Twenty questions: every category, difficulties cycling EASY..EXPERT."""
    categories = list(QuestionCategory)
    tiers = list(DifficultyTier)
    return [
        _make_question(
            f"q{i}",
            category=categories[i % len(categories)],
            difficulty=tiers[i % len(tiers)],
            knowledge_points=("algebra",) if i % 2 == 0 else ("geometry",),
            tags=("unit1",) if i < 10 else ("unit2",),
        )
        for i in range(20)
    ]
