import logging
from dataclasses import dataclass, field
from typing import Literal, cast, overload

import numpy as np
from scipy.special import roots_jacobi as _scipy_roots_jacobi

from .exceptions import BasisConstructionError
from .input_validation import validate_polynomial_degree
from .tl_types import FloatArray
from .utils.constants import BASIS_TOLERANCE, ZERO_TOLERANCE


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadauBasisComponents:
    """Constants of the Legendre-Gauss-Radau scheme for one collocation degree.

    All quantities live on the unit interval [0, 1]. ``state_approximation_nodes``
    holds the left endpoint followed by the ``degree`` collocation nodes, the last
    of which is 1. ``differentiation_matrix`` has shape ``(degree + 1, degree)``:
    column ``d`` maps the state values at the approximation nodes to the
    derivative of their interpolating polynomial at collocation node ``d``.
    ``legendre_roots`` are the ``degree - 1`` interior points used for the
    control and multiplier interpolation checks.
    """

    degree: int
    collocation_nodes: FloatArray = field(default_factory=lambda: np.array([], dtype=np.float64))
    quadrature_weights: FloatArray = field(default_factory=lambda: np.array([], dtype=np.float64))
    state_approximation_nodes: FloatArray = field(
        default_factory=lambda: np.array([], dtype=np.float64)
    )
    differentiation_matrix: FloatArray = field(
        default_factory=lambda: np.empty((0, 0), dtype=np.float64)
    )
    barycentric_weights_for_state_nodes: FloatArray = field(
        default_factory=lambda: np.array([], dtype=np.float64)
    )
    legendre_roots: FloatArray = field(default_factory=lambda: np.array([], dtype=np.float64))


@dataclass
class RadauNodesAndWeights:
    state_approximation_nodes: FloatArray
    collocation_nodes: FloatArray
    quadrature_weights: FloatArray


@overload
def roots_jacobi(
    n: int, alpha: float, beta: float, mu: Literal[False]
) -> tuple[FloatArray, FloatArray]: ...


@overload
def roots_jacobi(
    n: int, alpha: float, beta: float, mu: Literal[True]
) -> tuple[FloatArray, FloatArray, float]: ...


def roots_jacobi(
    n: int, alpha: float, beta: float, mu: bool = False
) -> tuple[FloatArray, FloatArray] | tuple[FloatArray, FloatArray, float]:
    # Wrapper for scipy roots_jacobi with proper typing - parameter validation assumed
    if mu:
        result = _scipy_roots_jacobi(n, alpha, beta, mu=True)
        return (
            cast(FloatArray, result[0].astype(np.float64)),
            cast(FloatArray, result[1].astype(np.float64)),
            float(result[2]),
        )
    result = _scipy_roots_jacobi(n, alpha, beta, mu=False)
    return (
        cast(FloatArray, result[0].astype(np.float64)),
        cast(FloatArray, result[1].astype(np.float64)),
    )


def _check_unit_interval_roots(roots: FloatArray, name: str, degree: int) -> None:
    # Root finding is an eigenvalue solve; anything outside (0, 1) or unsorted
    # means it did not converge for this degree.
    context = f"degree {degree}"
    if not np.all(np.isfinite(roots)):
        raise BasisConstructionError(f"{name} contain NaN or Inf values", context)
    if roots.size and (roots[0] <= 0.0 or roots[-1] > 1.0):
        raise BasisConstructionError(
            f"{name} fall outside (0, 1]: [{roots[0]}, {roots[-1]}]", context
        )
    if np.any(np.diff(roots) <= ZERO_TOLERANCE):
        raise BasisConstructionError(f"{name} are not strictly increasing", context)


def compute_legendre_gauss_radau_nodes_and_weights(
    num_collocation_nodes: int,
) -> RadauNodesAndWeights:
    """Right-sided Radau nodes and weights mapped from [-1, 1] onto [0, 1].

    The node at 1 is included and the node at 0 excluded. The interior nodes are
    the roots of the Jacobi polynomial P^(1,0)_{N-1}.
    """
    if num_collocation_nodes == 1:
        nodes_pm1 = np.array([1.0], dtype=np.float64)
        weights_pm1 = np.array([2.0], dtype=np.float64)
    else:
        num_interior_roots = num_collocation_nodes - 1
        interior_roots, jacobi_weights, _ = roots_jacobi(num_interior_roots, 1.0, 0.0, mu=True)
        # Jacobi weights carry the (1 - x) factor of the weight function
        interior_weights = jacobi_weights / np.subtract(1.0, interior_roots)
        right_endpoint_weight = 2.0 / (num_collocation_nodes**2)
        nodes_pm1 = np.concatenate([interior_roots, [1.0]])
        weights_pm1 = np.concatenate([interior_weights, [right_endpoint_weight]])

    order = np.argsort(nodes_pm1)
    collocation_nodes = (nodes_pm1[order] + 1.0) / 2.0
    quadrature_weights = weights_pm1[order] / 2.0

    state_approximation_nodes = np.concatenate([[0.0], collocation_nodes])

    return RadauNodesAndWeights(
        state_approximation_nodes=state_approximation_nodes.astype(np.float64),
        collocation_nodes=collocation_nodes.astype(np.float64),
        quadrature_weights=quadrature_weights.astype(np.float64),
    )


def compute_legendre_roots(num_roots: int) -> FloatArray:
    """Gauss-Legendre roots on (0, 1); empty for ``num_roots == 0``."""
    if num_roots == 0:
        return np.array([], dtype=np.float64)
    roots_pm1, _ = roots_jacobi(num_roots, 0.0, 0.0, mu=False)
    return np.sort((roots_pm1 + 1.0) / 2.0).astype(np.float64)


def _compute_barycentric_weights(nodes: FloatArray) -> FloatArray:
    num_nodes = len(nodes)
    if num_nodes == 1:
        return np.array([1.0], dtype=np.float64)

    differences_matrix = nodes[:, np.newaxis] - nodes[np.newaxis, :]
    np.fill_diagonal(differences_matrix, 1.0)
    if np.any(differences_matrix == 0.0):
        raise BasisConstructionError("Coincident interpolation nodes", f"nodes {nodes}")

    products = np.prod(differences_matrix, axis=1, dtype=np.float64)
    return (1.0 / products).astype(np.float64)


def compute_lagrange_derivative_coefficients_at_node(
    polynomial_definition_nodes: FloatArray,
    barycentric_weights: FloatArray,
    node_index: int,
) -> FloatArray:
    """Derivatives of every Lagrange basis polynomial at one of its own nodes."""
    num_nodes = len(polynomial_definition_nodes)
    node_diffs = polynomial_definition_nodes[node_index] - polynomial_definition_nodes
    non_diagonal_mask = np.arange(num_nodes) != node_index

    derivatives = np.zeros(num_nodes, dtype=np.float64)
    weight_ratios = barycentric_weights / barycentric_weights[node_index]
    derivatives[non_diagonal_mask] = (
        weight_ratios[non_diagonal_mask] / node_diffs[non_diagonal_mask]
    )
    # Diagonal from the negative row sum keeps derivatives of constants exactly zero
    derivatives[node_index] = -np.sum(derivatives[non_diagonal_mask])
    return derivatives


def compute_radau_collocation_components(degree: int) -> RadauBasisComponents:
    """Build the LGR basis table for ``degree`` collocation nodes per interval.

    Deterministic for a given degree: the same Golub-Welsch root finding is used
    on every call, so repeated construction reproduces identical tables.

    Raises:
        ConfigurationError: degree is not an integer >= 1
        BasisConstructionError: root finding or the quadrature check failed
    """
    validate_polynomial_degree(degree)
    degree = int(degree)

    lgr_data = compute_legendre_gauss_radau_nodes_and_weights(degree)
    _check_unit_interval_roots(lgr_data.collocation_nodes, "Radau collocation nodes", degree)
    if not np.isclose(lgr_data.collocation_nodes[-1], 1.0, rtol=0.0, atol=ZERO_TOLERANCE):
        raise BasisConstructionError(
            f"Last Radau node must be 1.0, got {lgr_data.collocation_nodes[-1]}", f"degree {degree}"
        )

    weight_sum = float(np.sum(lgr_data.quadrature_weights))
    weights_finite = np.all(np.isfinite(lgr_data.quadrature_weights))
    if not weights_finite or abs(weight_sum - 1.0) > BASIS_TOLERANCE:
        raise BasisConstructionError(
            f"Radau quadrature weights sum to {weight_sum}, expected 1.0", f"degree {degree}"
        )

    legendre_roots = compute_legendre_roots(degree - 1)
    _check_unit_interval_roots(legendre_roots, "Legendre roots", degree)

    state_nodes = lgr_data.state_approximation_nodes
    bary_weights = _compute_barycentric_weights(state_nodes)

    # Column d holds the derivative of each Lagrange polynomial at collocation node d
    diff_matrix = np.zeros((degree + 1, degree), dtype=np.float64)
    for d in range(degree):
        diff_matrix[:, d] = compute_lagrange_derivative_coefficients_at_node(
            state_nodes, bary_weights, d + 1
        )

    if not np.all(np.isfinite(diff_matrix)):
        raise BasisConstructionError("Differentiation matrix contains NaN or Inf values")

    for array in (
        lgr_data.collocation_nodes,
        lgr_data.quadrature_weights,
        state_nodes,
        diff_matrix,
        bary_weights,
        legendre_roots,
    ):
        array.flags.writeable = False

    logger.debug(
        "Built LGR basis: degree=%d, nodes=%s, weight_sum=%.16g",
        degree,
        lgr_data.collocation_nodes,
        weight_sum,
    )

    return RadauBasisComponents(
        degree=degree,
        collocation_nodes=lgr_data.collocation_nodes,
        quadrature_weights=lgr_data.quadrature_weights,
        state_approximation_nodes=state_nodes,
        differentiation_matrix=diff_matrix,
        barycentric_weights_for_state_nodes=bary_weights,
        legendre_roots=legendre_roots,
    )
