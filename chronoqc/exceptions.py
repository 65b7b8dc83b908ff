"""Exception types raised by the integrity core."""


class ChronoQCError(Exception):
    """Base class for errors raised by chronoqc."""


class CallerInputError(ChronoQCError, ValueError):
    """The caller supplied input the core refuses to work with."""


class InvalidJudgeInputError(CallerInputError):
    """Too few events or an unrecognized era literal for the puzzle judge."""


class MalformedOrderingError(CallerInputError):
    """A submitted ordering does not cover exactly the puzzle's events."""


class EventReuseError(CallerInputError):
    """An event was attached to a second puzzle within the same game mode."""


class ModelCallError(ChronoQCError):
    """The generative model provider failed or is not configured."""
