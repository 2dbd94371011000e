from typing import List, Optional, Tuple

from ..schemas import Iteration
from .tableau import StandardTableau


class IterationRecorder:
    """Collects one frozen snapshot per simplex step for a single solve."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._iterations: List[Iteration] = []

    @property
    def iterations(self) -> List[Iteration]:
        return list(self._iterations)

    @property
    def last(self) -> Optional[Iteration]:
        return self._iterations[-1] if self._iterations else None

    def record(
        self,
        state: StandardTableau,
        phase: Optional[int] = None,
        entering: Optional[str] = None,
        leaving: Optional[str] = None,
        pivot: Optional[Tuple[int, int, float]] = None,
    ) -> Iteration:
        snapshot = Iteration(
            tableau=tuple(tuple(row) for row in state.tableau.tolist()),
            basis=tuple(state.basic_variables()),
            columns=tuple(state.columns),
            entering=entering,
            leaving=leaving,
            pivot_row=pivot[0] if pivot else None,
            pivot_col=pivot[1] if pivot else None,
            pivot_element=pivot[2] if pivot else None,
            phase=phase,
        )
        if not self.enabled and self._iterations:
            # only the latest state is kept
            self._iterations[-1] = snapshot
        else:
            self._iterations.append(snapshot)
        return snapshot
