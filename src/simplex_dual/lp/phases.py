import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

import numpy as np

from ..schemas import LPProblem, SolveOptions, Strategy, VariableKind
from .pivot import pivot, select_entering_column, select_leaving_row
from .tableau import StandardTableau, build_tableau, check_big_m, needs_artificials
from .trace import IterationRecorder

logger = logging.getLogger(__name__)

LoopStatus = Literal["optimal", "unbounded", "iteration_limit"]
OutcomeStatus = Literal["optimal", "unbounded", "infeasible", "iteration_limit"]


@dataclass
class PhaseOutcome:
    status: OutcomeStatus
    state: StandardTableau
    strategy: Strategy
    pivots: int
    message: str = ""


class PhaseController:
    """Drives pivots to a terminal tableau for one solve call."""

    def __init__(self, options: SolveOptions, recorder: IterationRecorder) -> None:
        self.options = options
        self.recorder = recorder
        self.pivots = 0

    def run(self, problem: LPProblem) -> PhaseOutcome:
        strategy = self.options.strategy
        if strategy == "standard" and needs_artificials(problem):
            logger.warning(
                "Problem has >= or = constraints; the standard method has no "
                "starting basis, switching to two-phase."
            )
            outcome = self._two_phase(problem)
            outcome.message = " ".join(
                filter(None, ["Standard method needs a feasible basis; solved with two-phase.", outcome.message])
            )
            return outcome
        if strategy == "big-m":
            return self._big_m(problem)
        if strategy == "two-phase" and needs_artificials(problem):
            return self._two_phase(problem)
        state = build_tableau(problem, strategy)
        self.recorder.record(state)
        status = self._run_simplex(state)
        return self._outcome(status, state, strategy)

    def _outcome(self, status: OutcomeStatus, state: StandardTableau, strategy: Strategy, message: str = "") -> PhaseOutcome:
        if status == "iteration_limit" and not message:
            message = f"Hit iteration limit ({self.options.max_iters} pivots) before optimality."
        return PhaseOutcome(status=status, state=state, strategy=strategy, pivots=self.pivots, message=message)

    def _run_simplex(
        self,
        state: StandardTableau,
        phase: Optional[int] = None,
    ) -> LoopStatus:
        opts = self.options
        while True:
            col = select_entering_column(state.tableau, opts.tol, opts.pivot_rule)
            if col is None:
                return "optimal"
            row = select_leaving_row(state.tableau, col, opts.tol, opts.pivot_rule, state.basis)
            if row is None:
                logger.debug("Column %s has no positive entry; unbounded.", state.columns[col].label)
                return "unbounded"
            if self.pivots >= opts.max_iters:
                logger.warning("Iteration limit of %d pivots reached.", opts.max_iters)
                return "iteration_limit"
            self._pivot(state, row, col, phase)

    def _pivot(self, state: StandardTableau, row: int, col: int, phase: Optional[int]) -> None:
        entering = state.columns[col].label
        leaving = state.columns[state.basis[row - 1]].label
        element = pivot(state.tableau, row, col)
        state.basis[row - 1] = col
        self.pivots += 1
        logger.debug(
            "Pivot %d (phase %s): %s enters, %s leaves, element %.6g",
            self.pivots,
            phase,
            entering,
            leaving,
            element,
        )
        self.recorder.record(state, phase, entering, leaving, (row, col, element))

    def _big_m(self, problem: LPProblem) -> PhaseOutcome:
        opts = self.options
        warning = check_big_m(problem, opts.big_m) if needs_artificials(problem) else None
        if warning:
            logger.warning(warning)
        state = build_tableau(problem, "big-m", big_m=opts.big_m)
        self.recorder.record(state)
        status = self._run_simplex(state)
        # a positive artificial means infeasible, even when a ray was found
        if status in ("optimal", "unbounded"):
            for row_idx, col in enumerate(state.basis, start=1):
                if state.columns[col].kind is VariableKind.ARTIFICIAL and state.tableau[row_idx, -1] > opts.tol:
                    message = f"Artificial variable {state.columns[col].label} stays positive; infeasible."
                    return self._outcome("infeasible", state, "big-m", " ".join(filter(None, [message, warning])))
        return self._outcome(status, state, "big-m", warning or "")

    def _two_phase(self, problem: LPProblem) -> PhaseOutcome:
        state = build_tableau(problem, "two-phase")
        phase1 = self._phase_I(state)
        if phase1 is not None:
            return phase1
        state = self._phase_II_tableau(state)
        self.recorder.record(state, phase=2)
        status = self._run_simplex(state, phase=2)
        return self._outcome(status, state, "two-phase")

    def _phase_I(self, state: StandardTableau) -> Optional[PhaseOutcome]:
        """Minimise the artificial sum; returns an outcome only when solving stops here."""

        opts = self.options
        artificial = state.artificial_columns
        objective = state.tableau[0]
        objective[:] = 0.0
        objective[artificial] = 1.0
        for row_idx, col in enumerate(state.basis, start=1):
            if state.columns[col].kind is VariableKind.ARTIFICIAL:
                objective -= state.tableau[row_idx]
        self.recorder.record(state, phase=1)

        status = self._run_simplex(state, phase=1)
        if status == "iteration_limit":
            return self._outcome(status, state, "two-phase", "Hit iteration limit in Phase I.")
        if status == "unbounded":
            # max of -sum(a) is bounded by 0, so this only comes from bad data
            return self._outcome(status, state, "two-phase", "Phase I detected unbounded auxiliary problem.")

        residual = abs(float(state.tableau[0, -1]))
        if residual > opts.phase1_tol:
            logger.info("Phase I ended with artificial sum %.3g; infeasible.", residual)
            return self._outcome("infeasible", state, "two-phase", "Infeasible.")

        self._drive_out_artificials(state)
        return None

    def _drive_out_artificials(self, state: StandardTableau) -> None:
        """Pivot zero-level artificials out of the basis, drop redundant rows."""

        tol = self.options.tol
        artificial = set(state.artificial_columns)
        redundant: List[int] = []
        for row_idx in range(1, state.num_rows + 1):
            if state.basis[row_idx - 1] not in artificial:
                continue
            candidates = [
                j for j in range(state.tableau.shape[1] - 1)
                if j not in artificial and abs(state.tableau[row_idx, j]) > tol
            ]
            if candidates:
                self._pivot(state, row_idx, candidates[0], phase=1)
            else:
                redundant.append(row_idx)

        if redundant:
            logger.warning("Removing %d redundant constraint row(s) after Phase I.", len(redundant))
            state.tableau = np.delete(state.tableau, redundant, axis=0)
            state.basis = [col for i, col in enumerate(state.basis, start=1) if i not in redundant]

    def _phase_II_tableau(self, state: StandardTableau) -> StandardTableau:
        """Fresh tableau without artificial columns and with the real objective."""

        artificial = state.artificial_columns
        tableau = np.delete(state.tableau, artificial, axis=1)
        columns = [col for col in state.columns if col.kind is not VariableKind.ARTIFICIAL]
        new_state = StandardTableau(
            tableau=tableau,
            basis=list(state.basis),
            columns=columns,
            num_decision=state.num_decision,
            num_slack=state.num_slack,
            num_surplus=state.num_surplus,
            num_artificial=0,
            kind=state.kind,
            costs=state.costs.copy(),
        )

        objective = tableau[0]
        objective[:] = 0.0
        objective[: state.num_decision] = -state.costs
        for row_idx, col in enumerate(new_state.basis, start=1):
            objective -= objective[col] * tableau[row_idx]
        return new_state
