"""Error classes for bridge pricing.

Every failure the pricing path can produce is one of these types; none of
them is swallowed inside the package.
"""


class BridgeCoreError(Exception):
    """Base error for bridge pricing operations."""

    pass


class ValidationError(BridgeCoreError):
    """Amount has more fractional digits than the token's decimals permit."""

    pass


class InsufficientPoolLiquidity(BridgeCoreError):
    """A forward or reverse pricing computation yielded a non-positive amount."""

    def __init__(self, message: str = "Insufficient pool liquidity") -> None:
        super().__init__(message)


class FetchFailure(BridgeCoreError):
    """The pool-info or chain-details collaborator failed.

    The original exception is kept as ``__cause__``.
    """

    pass


class ConvergenceError(BridgeCoreError):
    """Newton iteration for the pool invariant did not converge.

    Indicates a corrupt snapshot (an invariant inconsistent with its
    amplification) rather than a user error.
    """

    pass
