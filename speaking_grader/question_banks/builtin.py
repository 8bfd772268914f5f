"""Built-in default question bank.

Always available, so the grader has questions to practise with even when
no bank files are installed.
"""

from speaking_grader.domain.models import Question, QuestionBank, QuestionType

DEFAULT_BANK_ID = "default"

DEFAULT_QUESTION_BANK = QuestionBank(
    id="wk1",
    name="Computers",
    description="Part 1 questions about computers",
    author="IELTS Practice Team",
    version="1.0",
    questions=[
        Question(
            id="q1",
            type=QuestionType.PART1,
            text="Do you often use a computer?",
            keywords=["computer", "use", "often"],
            optional_keywords=["daily", "work", "study", "essential", "regularly"],
        ),
        Question(
            id="q2",
            type=QuestionType.PART1,
            text="Do lots of students in your country use a computer?",
            keywords=["students", "country", "computer"],
            optional_keywords=["many", "most", "majority", "common", "widespread"],
        ),
        Question(
            id="q3",
            type=QuestionType.PART1,
            text="What do you use a computer for?",
            keywords=["computer", "use"],
            optional_keywords=[
                "work",
                "study",
                "entertainment",
                "internet",
                "email",
                "research",
                "communication",
            ],
        ),
        Question(
            id="q4",
            type=QuestionType.PART1,
            text="Do you use a computer for anything else?",
            keywords=["computer", "use"],
            optional_keywords=["also", "other", "additionally", "besides", "furthermore"],
        ),
    ],
)


def get_default_bank() -> QuestionBank:
    """Return a copy of the built-in bank so callers cannot mutate the shared one."""
    return DEFAULT_QUESTION_BANK.model_copy(deep=True)
