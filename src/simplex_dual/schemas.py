from __future__ import annotations

import math
from enum import Enum
from typing import List, Literal, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

ObjectiveKind = Literal["maximize", "minimize"]
Relation = Literal["<=", "=", ">="]
Strategy = Literal["standard", "big-m", "two-phase"]
PivotRule = Literal["dantzig", "bland"]
Status = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]

_RELATION_ALIASES = {"==": "=", "≤": "<=", "≥": ">=", "=<": "<=", "=>": ">="}


class Constraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    coefficients: List[float] = Field(default_factory=list)
    relation: Relation
    rhs: float = 0.0

    @field_validator("relation", mode="before")
    @classmethod
    def _normalise_relation(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return _RELATION_ALIASES.get(value, value)
        return value


class LPProblem(BaseModel):
    """A linear program over non-negative decision variables."""

    model_config = ConfigDict(frozen=True)

    objective: List[float]
    constraints: List[Constraint] = Field(default_factory=list)
    kind: ObjectiveKind = "maximize"

    @model_validator(mode="after")
    def _check_shape(self) -> "LPProblem":
        n = len(self.objective)
        if n == 0:
            raise ValueError("Objective needs at least one coefficient.")
        if not all(math.isfinite(v) for v in self.objective):
            raise ValueError("Objective coefficients must be finite numbers.")
        for idx, cons in enumerate(self.constraints):
            if len(cons.coefficients) > n:
                raise ValueError(
                    f"Constraint {idx + 1} has {len(cons.coefficients)} coefficients "
                    f"but the objective has only {n}."
                )
            if not all(math.isfinite(v) for v in cons.coefficients) or not math.isfinite(cons.rhs):
                raise ValueError(f"Constraint {idx + 1} contains a non-finite number.")
        return self

    @property
    def num_variables(self) -> int:
        return len(self.objective)

    def rows(self) -> np.ndarray:
        """Constraint matrix with short coefficient rows padded by zeros."""
        A = np.zeros((len(self.constraints), self.num_variables), dtype=float)
        for i, cons in enumerate(self.constraints):
            A[i, : len(cons.coefficients)] = cons.coefficients
        return A

    def rhs(self) -> np.ndarray:
        return np.array([cons.rhs for cons in self.constraints], dtype=float)


class VariableKind(str, Enum):
    DECISION = "decision"
    SLACK = "slack"
    SURPLUS = "surplus"
    ARTIFICIAL = "artificial"


_LABEL_PREFIX = {
    VariableKind.DECISION: "x",
    VariableKind.SLACK: "s",
    VariableKind.SURPLUS: "e",
    VariableKind.ARTIFICIAL: "a",
}


class TableauVariable(BaseModel):
    """One tableau column; a basic variable when it appears in a basis."""

    model_config = ConfigDict(frozen=True)

    index: int
    kind: VariableKind
    ordinal: int
    constraint: Optional[int] = None

    @property
    def label(self) -> str:
        return f"{_LABEL_PREFIX[self.kind]}{self.ordinal}"


BasicVariable = TableauVariable


class Iteration(BaseModel):
    model_config = ConfigDict(frozen=True)

    tableau: Tuple[Tuple[float, ...], ...]
    basis: Tuple[TableauVariable, ...]
    columns: Tuple[TableauVariable, ...]
    entering: Optional[str] = None
    leaving: Optional[str] = None
    pivot_row: Optional[int] = None
    pivot_col: Optional[int] = None
    pivot_element: Optional[float] = None
    phase: Optional[Literal[1, 2]] = None


class SolveOptions(BaseModel):
    strategy: Strategy = "standard"
    max_iters: int = Field(default=100, ge=1)
    tol: float = 1e-9
    phase1_tol: float = 1e-10
    pivot_rule: PivotRule = "dantzig"
    big_m: float = Field(default=1e6, gt=0)
    record_iterations: bool = True


class Solution(BaseModel):
    status: Status
    strategy: Strategy
    objective_value: Optional[float]
    values: List[float] | None
    duals: List[float] | None = None
    iterations: List[Iteration] = Field(default_factory=list)
    pivots: int = 0
    message: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def feasible(self) -> bool:
        return self.status in ("optimal", "unbounded")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def optimal(self) -> bool:
        return self.status == "optimal"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unbounded(self) -> bool:
        return self.status == "unbounded"


class DualResult(BaseModel):
    primal_solution: Solution
    dual_problem: LPProblem
    dual_solution: Solution
