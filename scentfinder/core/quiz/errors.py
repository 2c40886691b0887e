"""
Errors raised by the quiz engine.

Views catch QuizError and turn it into a JSON error; everything else is a bug.
"""


class QuizError(Exception):
    """Base class for every error the quiz engine raises."""
    pass


class InvalidQuizConfiguration(QuizError):
    """The question set or catalog cannot produce a playable quiz."""
    pass


class UnknownOption(QuizError):
    def __init__(self, question_id, option_id):
        self.question_id = question_id
        self.option_id = option_id
        super().__init__(f"Option '{option_id}' does not belong to question '{question_id}'")


class NoReachableQuestion(QuizError):
    def __init__(self, index, total):
        self.index = index
        self.total = total
        super().__init__(f"No question at position {index} (quiz has {total} steps)")


class AggregationEmpty(QuizError):
    """No product scored above zero."""
    pass


class InvalidDate(QuizError):
    def __init__(self, month, day):
        self.month = month
        self.day = day
        super().__init__(f"Invalid birth date: month={month!r}, day={day!r}")


class IllegalTransition(QuizError):
    """A session transition was requested from a state that does not allow it."""
    pass
