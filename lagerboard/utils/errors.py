# lagerboard/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (period names, dates).
    Should NOT print traceback.
    """


class QueryFailure(RuntimeError):
    """
    A period fetch failed: timeout, connection error, non-2xx status or a
    payload that is not a list of projects.

    The kiosk treats it as "no data" for that period.
    """

    def __init__(self, period: str, reason: str):
        super().__init__(f"{period}: {reason}")
        self.period = period
        self.reason = reason


class StoreError(RuntimeError):
    """Raised by a project store when the backing database query fails."""
