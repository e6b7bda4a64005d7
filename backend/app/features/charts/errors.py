"""Chart rendering errors."""


class ChartError(Exception):
    """Base chart error."""
    pass


class EmptyDatasetError(ChartError):
    """No records left to plot (no finishers or nothing parseable).

    The message is meant to be shown to the user as-is.
    """
    pass
