"""
Stable arrow identities across keyframes
"""

import numpy as np
from dataclasses import replace
from typing import List, Set, Tuple
import logging
from scipy.optimize import linear_sum_assignment

from gridiron_overlay.core import AnnotationFrame, ArrowAnnotation
from gridiron_overlay.core.constants import ARROW_MATCH_DISTANCE


class ArrowIdentityAssigner:
    """Assigns synthetic ids to arrows by matching consecutive keyframes"""

    def __init__(self, match_distance: float = ARROW_MATCH_DISTANCE, id_prefix: str = "arrow"):
        """
        Initialize arrow identity assigner

        Args:
            match_distance: Maximum mean endpoint distance (percent units) for a match
            id_prefix: Prefix for generated ids
        """
        self.match_distance = match_distance
        self.id_prefix = id_prefix
        self.logger = logging.getLogger(__name__)
        self._next_id = 1
        self._reserved_ids: Set[str] = set()

    def assign(self, frames: List[AnnotationFrame]) -> List[AnnotationFrame]:
        """
        Return copies of frames whose arrows all carry an id

        Args:
            frames: Keyframes sorted by timestamp

        Returns:
            New frame list; arrows that continue from the previous keyframe keep its id
        """
        self._next_id = 1
        # Generated ids must not collide with explicit ids from any keyframe
        self._reserved_ids = {a.id for frame in frames for a in frame.arrows if a.id is not None}
        result: List[AnnotationFrame] = []
        previous: List[ArrowAnnotation] = []

        for frame in frames:
            arrows = self._assign_frame(frame.arrows, previous)
            result.append(replace(frame, arrows=arrows))
            previous = arrows

        return result

    def _assign_frame(self,
                      arrows: List[ArrowAnnotation],
                      previous: List[ArrowAnnotation]) -> List[ArrowAnnotation]:
        assigned: List[ArrowAnnotation] = list(arrows)
        taken = {a.id for a in arrows if a.id is not None}
        reserved = self._reserved_ids | taken

        pending = [i for i, a in enumerate(arrows) if a.id is None]
        candidates = [a for a in previous if a.id not in taken]

        matches, unmatched = self._match(
            [arrows[i] for i in pending], candidates
        )

        for local_idx, prev_idx in matches:
            arrow_idx = pending[local_idx]
            assigned[arrow_idx] = replace(arrows[arrow_idx], id=candidates[prev_idx].id)

        for local_idx in unmatched:
            arrow_idx = pending[local_idx]
            assigned[arrow_idx] = replace(arrows[arrow_idx], id=self._new_id(reserved))

        return assigned

    def _match(self,
               arrows: List[ArrowAnnotation],
               previous: List[ArrowAnnotation]) -> Tuple[List[Tuple[int, int]], List[int]]:
        """Hungarian matching on endpoint distance"""
        if not arrows or not previous:
            return [], list(range(len(arrows)))

        cost_matrix = self._build_cost_matrix(arrows, previous)
        row_indices, col_indices = linear_sum_assignment(cost_matrix)

        matches = []
        unmatched = set(range(len(arrows)))
        for row, col in zip(row_indices, col_indices):
            if cost_matrix[row, col] <= self.match_distance:
                matches.append((int(row), int(col)))
                unmatched.discard(int(row))

        if unmatched:
            self.logger.debug(f"{len(unmatched)} arrows started new identities")

        return matches, sorted(unmatched)

    def _build_cost_matrix(self,
                           arrows: List[ArrowAnnotation],
                           previous: List[ArrowAnnotation]) -> np.ndarray:
        current = np.array([[*a.from_xy, *a.to_xy] for a in arrows], dtype=float)
        earlier = np.array([[*a.from_xy, *a.to_xy] for a in previous], dtype=float)

        # Mean of from-point and to-point distances
        diff = current[:, None, :] - earlier[None, :, :]
        from_dist = np.linalg.norm(diff[..., 0:2], axis=-1)
        to_dist = np.linalg.norm(diff[..., 2:4], axis=-1)
        return (from_dist + to_dist) / 2

    def _new_id(self, taken: set) -> str:
        while True:
            candidate = f"{self.id_prefix}_{self._next_id}"
            self._next_id += 1
            if candidate not in taken:
                taken.add(candidate)
                return candidate
