"""
Convergence criteria for clustering algorithms.

The partitioning algorithms stop once an iteration changes nothing:
- no point moved to another cluster
- no centroid (or medoid) changed

Each condition is its own criterion; CombinedCriterion joins them.
"""

from typing import Dict, Any, List, Optional, Sequence

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on the fraction of points that change clusters.

    Args:
        max_change_fraction: Largest fraction of changed points still
            considered stable; 0 means no point may move
        patience: Number of stable iterations needed before convergence
    """

    def __init__(self, max_change_fraction: float = 0.0,
                 patience: int = 1):
        super().__init__()
        self.max_change_fraction = max_change_fraction
        self.patience = patience
        self._prev_assignments: Optional[List[int]] = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        assignments = current_state['assignments']
        if hasattr(assignments, 'tolist'):
            assignments = assignments.tolist()
        current_assignments = list(assignments)

        if self._prev_assignments is None:
            # Nothing to compare against: every point counts as moved
            n_changed = len(current_assignments)
        else:
            n_changed = sum(1 for a, b in zip(current_assignments, self._prev_assignments)
                            if a != b)

        n_total = max(len(current_assignments), 1)
        change_fraction = n_changed / n_total

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })

        if self._prev_assignments is not None and change_fraction <= self.max_change_fraction:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False

        self._prev_assignments = current_assignments

        return converged

    @property
    def last_n_changed(self) -> int:
        return self.history[-1]['n_changed'] if self.history else 0

    def reset(self):
        super().reset()
        self._prev_assignments = None
        self._stable_count = 0


class ChangeInCentroids(ConvergenceCriterion):
    """Convergence when no centroid changed during the iteration.

    Reads ``centroids_changed`` from the state when the algorithm reports it
    directly; otherwise compares ``centroids`` with the previous call.
    """

    def __init__(self):
        super().__init__()
        self._prev_centroids: Optional[List[tuple]] = None

    def check(self, current_state: Dict[str, Any]) -> bool:
        if 'centroids_changed' in current_state:
            changed = bool(current_state['centroids_changed'])
        else:
            centroids = [tuple(c) for c in current_state['centroids']]
            changed = self._prev_centroids is None or centroids != self._prev_centroids
            self._prev_centroids = centroids

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'centroids_changed': changed
        })

        return not changed

    def reset(self):
        super().reset()
        self._prev_centroids = None


class CombinedCriterion(ConvergenceCriterion):
    """Combine multiple convergence criteria with AND/OR logic.

    Args:
        criteria: List of convergence criteria
        mode: 'any' (OR) or 'all' (AND)
    """

    def __init__(self, criteria: Sequence[ConvergenceCriterion],
                 mode: str = 'any'):
        super().__init__()
        self.criteria = list(criteria)
        self.mode = mode

        if mode not in ['any', 'all']:
            raise ValueError(f"Mode must be 'any' or 'all', got {mode}")

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check all criteria and combine results."""
        # Every criterion must see every state, so no short-circuit
        results = [criterion.check(current_state) for criterion in self.criteria]

        if self.mode == 'any':
            converged = any(results)
        else:
            converged = all(results)

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'individual_results': results,
            'converged': converged
        })

        return converged

    def reset(self):
        """Reset all sub-criteria."""
        super().reset()
        for criterion in self.criteria:
            criterion.reset()


class MaxIterations(ConvergenceCriterion):
    """Never converges; the run ends at the algorithm's max_iter."""

    def check(self, current_state: Dict[str, Any]) -> bool:
        return False


def no_change_criterion() -> CombinedCriterion:
    """Stop when neither assignments nor centroids changed."""
    return CombinedCriterion([ChangeInAssignments(), ChangeInCentroids()], mode='all')
