"""
Dense direct solve of an assembled MNA system.

The same path serves both scalar fields: numpy dispatches to the real
or complex LAPACK LU routine from the dtype of G. Singular and
near-singular systems are reported as ``None`` instead of raising, so
callers can fall back to a zero/empty result and keep rendering.
"""

import logging
from typing import Optional

import numpy as np

from engine.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def solve(
    G: np.ndarray,
    b: np.ndarray,
    rcond_limit: float = DEFAULT_CONFIG.singular_rcond,
) -> Optional[np.ndarray]:
    """
    Solve G·x = b.

    Args:
        G: Square matrix (float or complex).
        b: Right-hand side with matching length.
        rcond_limit: Minimum reciprocal condition number accepted.

    Returns:
        Solution vector, or None when the system is empty, singular,
        too ill-conditioned to trust (e.g. a floating node) or the
        solution is not finite.
    """
    size = b.shape[0]
    if size == 0:
        logger.debug("Empty system, nothing to solve")
        return None

    with np.errstate(all='ignore'):
        try:
            cond = np.linalg.cond(G)
            if not np.isfinite(cond) or cond * rcond_limit >= 1.0:
                logger.debug("Singular system (size=%d, cond=%s)", size, cond)
                return None
            x = np.linalg.solve(G, b)
        except np.linalg.LinAlgError:
            logger.debug("Linear solve failed (size=%d)", size, exc_info=True)
            return None

    if not np.all(np.isfinite(x)):
        logger.debug("Non-finite solution (size=%d)", size)
        return None
    return x
