"""Error taxonomy for list synchronization.

None of these escape the synchronizer's public ``get_list()``: every failure
ends in reuse of the last cached list or in ``None``. URL parse failures have
no exception class at all, ``classify_url`` returns ``None`` instead.
"""


class DpaGuardError(Exception):
    """Base class for dpa-guard errors."""


class AuthError(DpaGuardError):
    """No credential could be obtained (silent auth failed or prompt cancelled)."""


class ListFetchError(DpaGuardError):
    """The list endpoint could not be read.

    Attributes:
        status_code: HTTP status of the failed response, None for transport
            errors and malformed bodies.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
