"""
Cluster representation for heterogeneous survey data.

A cluster is a centroid vector plus the member vectors assigned to it. All
vectors are stored as tuples, so neither the caller nor the algorithms can
mutate a cluster's data through a shared reference.
"""

from typing import List, Optional, Sequence, Any

from ..base.data_structures import FeatureVector, FeatureSpec
from ..distances.heterogeneous import DistanceCalculator
from ..updates.aggregate import aggregate_vectors, check_multi_aggregation
from ..utils.validation import validate_vector


class Cluster:
    """Cluster represented by a centroid and its members.

    The centroid may be synthetic (means and modes, as produced by KMeans) or
    a real data point (a medoid, as produced by KMedoids).

    Args:
        centroid: Non-empty initial centroid
    """

    def __init__(self, centroid: Sequence[Any]):
        self._centroid = validate_vector(centroid, name='centroid')
        self._members: List[FeatureVector] = []

    @property
    def dimension(self) -> int:
        return len(self._centroid)

    @property
    def centroid(self) -> FeatureVector:
        return self._centroid

    @centroid.setter
    def centroid(self, value: Sequence[Any]):
        self.set_centroid(value)

    @property
    def members(self) -> List[FeatureVector]:
        return list(self._members)

    def get_centroid(self) -> FeatureVector:
        return self._centroid

    def get_members(self) -> List[FeatureVector]:
        return list(self._members)

    def set_centroid(self, centroid: Sequence[Any]) -> None:
        """Replace the centroid; its dimension must not change."""
        self._centroid = validate_vector(centroid, self.dimension, name='centroid')

    def add_member(self, vector: Sequence[Any]) -> None:
        self._members.append(validate_vector(vector, self.dimension, name='member'))

    def clear_members(self) -> None:
        self._members = []

    @property
    def size(self) -> int:
        return len(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def is_empty(self) -> bool:
        return not self._members

    def recompute_centroid(self, specs: Sequence[FeatureSpec],
                           multi_aggregation: str = 'label') -> bool:
        """Rebuild the centroid from the current members.

        Args:
            specs: One feature spec per dimension
            multi_aggregation: How multi-choice dimensions are summarized,
                see :func:`kprofiles.updates.aggregate.aggregate_dimension`

        Returns:
            True if the centroid changed

        Raises:
            ValueError: If specs is None or does not match the centroid dimension
        """
        if not self._members:
            return False
        if specs is None or len(specs) != self.dimension:
            raise ValueError("specs must match the centroid dimension")
        check_multi_aggregation(multi_aggregation)

        new_centroid = tuple(aggregate_vectors(
            self._members, self._centroid, specs, multi_aggregation
        ))

        changed = new_centroid != self._centroid
        self._centroid = new_centroid
        return changed

    def get_representant(self, specs: Sequence[FeatureSpec],
                         calculator: Optional[DistanceCalculator] = None) -> FeatureVector:
        """Real member closest to the centroid.

        Returns the centroid itself when the cluster has no members.
        """
        if specs is None:
            raise ValueError("specs cannot be None")
        if calculator is None:
            calculator = DistanceCalculator()

        if not self._members:
            return self._centroid

        if self._centroid in self._members:
            return self._centroid

        return min(self._members,
                   key=lambda member: calculator.distance(self._centroid, member, specs))

    def __repr__(self) -> str:
        return f"Cluster(centroid={list(self._centroid)}, size={len(self._members)})"
