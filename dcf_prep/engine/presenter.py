"""Choice shuffling for a single question."""

from dcf_prep.models import CHOICE_KEYS, AssembledQuestion, Question, ShuffledChoice

from .random_source import RandomSource, shuffle


def with_shuffled_choices(question: Question, rand: RandomSource) -> AssembledQuestion:
    """
    Reorder a question's choices and remap its correct answer.

    Args:
        question: Bank question
        rand: Random source

    Returns:
        AssembledQuestion whose ``shuffled_choices[remapped_correct_answer]``
        carries the original correct label
    """
    keys = shuffle(CHOICE_KEYS, rand)
    shuffled = [ShuffledChoice(key=key, text=question.choices[key]) for key in keys]
    remapped = keys.index(question.correct_answer)

    return AssembledQuestion(
        **question.model_dump(),
        shuffled_choices=shuffled,
        remapped_correct_answer=remapped,
    )
