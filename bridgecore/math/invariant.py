"""Two-asset StableSwap invariant math.

For the token balance x, the vUSD balance y and the amplification A, the
invariant D satisfies:

    4A(x + y) + D = 4AD + D^3 / (4xy)

Both D and an unknown balance are found with Newton-Raphson iteration on
exact integers, bounded by MAX_SOLVER_ITERATIONS and converged once two
successive iterates differ by at most CONVERGENCE_EPSILON.
"""

import structlog

from bridgecore.constants import CONVERGENCE_EPSILON, MAX_SOLVER_ITERATIONS
from bridgecore.errors import ConvergenceError

logger = structlog.get_logger()

N_COINS = 2


def _converged(current: int, previous: int) -> bool:
    return abs(current - previous) <= CONVERGENCE_EPSILON


def compute_d(a: int, x: int, y: int) -> int:
    """Calculate the invariant D for balances x and y.

    Algorithm:
        1. Initial guess: D = x + y
        2. D_P = D^3 / (4xy), computed one balance at a time
        3. D = (Ann*S + 2*D_P) * D / ((Ann - 1) * D + 3*D_P) with Ann = 4A
        4. Stop when |D_new - D_old| <= CONVERGENCE_EPSILON

    A pool with an empty side has a degenerate invariant of 0.

    Args:
        a: Amplification coefficient
        x: Token-side balance (system precision)
        y: vUSD-side balance (system precision)

    Returns:
        The invariant D

    Raises:
        ValueError: If a is not positive
        ConvergenceError: If iteration doesn't converge
    """
    if a <= 0:
        raise ValueError(f"Amplification must be positive, got {a}")

    if x <= 0 or y <= 0:
        return 0

    sum_balances = x + y
    ann = a * N_COINS**N_COINS
    d = sum_balances

    for _ in range(MAX_SOLVER_ITERATIONS):
        d_p = d
        for balance in (x, y):
            d_p = d_p * d // (N_COINS * balance)

        d_prev = d
        numerator = (ann * sum_balances + d_p * N_COINS) * d
        denominator = (ann - 1) * d + (N_COINS + 1) * d_p
        d = numerator // denominator

        if _converged(d, d_prev):
            return d

    logger.error("invariant_did_not_converge", a=a, x=x, y=y)
    raise ConvergenceError(f"Invariant did not converge after {MAX_SOLVER_ITERATIONS} iterations")


def compute_y(a: int, d: int, x: int) -> int:
    """Solve for the other balance given the invariant and one balance.

    Newton iteration on y^2 + (b - D)y = c, where
    c = D^3 / (4x * Ann) and b = x + D / Ann.

    A non-positive known balance or a zero invariant has no finite
    solution on the curve; 0 is returned and the caller sees a
    non-positive swap result.

    Args:
        a: Amplification coefficient
        d: Invariant D
        x: The known balance after the hypothetical swap

    Returns:
        The other balance that keeps D unchanged

    Raises:
        ValueError: If a is not positive
        ConvergenceError: If iteration doesn't converge
    """
    if a <= 0:
        raise ValueError(f"Amplification must be positive, got {a}")

    if x <= 0 or d <= 0:
        return 0

    ann = a * N_COINS**N_COINS
    c = d * d // (N_COINS * x)
    c = c * d // (ann * N_COINS)
    b = x + d // ann

    y = d
    for _ in range(MAX_SOLVER_ITERATIONS):
        y_prev = y
        denominator = 2 * y + b - d
        if denominator <= 0:
            raise ConvergenceError("Denominator became non-positive")
        y = (y * y + c) // denominator

        if _converged(y, y_prev):
            return y

    logger.error("balance_did_not_converge", a=a, d=d, x=x)
    raise ConvergenceError(f"Balance did not converge after {MAX_SOLVER_ITERATIONS} iterations")
