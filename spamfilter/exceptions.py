"""Errors raised by the spam filter pipeline."""


class SpamFilterError(Exception):
    pass


class ConfigError(SpamFilterError, ValueError):
    """Invalid pipeline configuration value."""


class SchemaError(SpamFilterError, ValueError):
    """Corpus rejected at the loader boundary (empty, missing columns, bad labels)."""


class DataInsufficiencyError(SpamFilterError):
    """Not enough TRAIN data of one class to compute frequencies or fit."""


class OrderingError(SpamFilterError, RuntimeError):
    """A step was called before the state it depends on was built."""


class FitDivergenceError(SpamFilterError, RuntimeError):
    """The logistic regression optimizer did not converge."""
