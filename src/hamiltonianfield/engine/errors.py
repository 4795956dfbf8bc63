"""Exceptions raised by the field engine."""


class InvalidConfigurationError(ValueError):
    """
    Raised when the engine is given a configuration it cannot honour:
    a non-positive grid or canvas size, a pixel buffer that does not match the
    canvas size, or inverted bucket thresholds.
    """
