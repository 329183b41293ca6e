class GrapherError(Exception):
    """Base class for every error raised by the grapher."""


class ConfigError(GrapherError):
    """Fatal: the run cannot start (degenerate viewport, empty marker set...)."""


class ParseError(GrapherError):
    """The expression grammar rejected the input text."""

    def __init__(self, text: str, message: str):
        self.text = text
        self.message = message
        super().__init__(f"{text!r}: {message}")


class EvaluationError(GrapherError):
    """A single evaluation failed. Carried as a value, see expression.Evaluation."""
