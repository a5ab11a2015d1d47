"""Elastic filter for one Irreducible Infeasible Subset (IIS).

The search never touches the caller's model. It copies it, makes every row
elastic with penalised slacks and then works in three phases:

A. solve the elastic program once;
B. while it stays feasible, fix every slack that carries relief back to zero,
   one at a time, re-solving after each fix, until the hardened rows alone are
   infeasible or one round per row has run; a round that finds no slack to fix
   while the program is still feasible is fatal;
C. release the hardened rows one by one, in the order they were hardened; a row
   whose release keeps the program infeasible is not needed, a row whose
   release makes it feasible again belongs to the IIS and is hardened again.

Removing rows from an infeasible linear or mixed-integer system can only keep
it infeasible or make it feasible, so the rows kept by phase C form an
infeasible set that loses infeasibility when any single member is dropped.
The set is irreducible for the order tested, not necessarily the smallest one.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..exceptions import NumericalInstabilityError
from ..model import (
    ReferenceMap,
    SlackTerms,
    copy_model,
    fix_variable,
    has_lower_bound,
    optimize,
    relax_with_penalty,
    set_lower_bound,
    set_upper_bound,
    unfix_variable,
    value,
)
from ..schemas import AnalyzerOptions, LPModel
from ..solvers.base import INFEASIBLE_STATUSES, OPTIMAL_STATUSES, Solver

logger = logging.getLogger(__name__)


class ElasticWorkspace:
    """State of one IIS search: the relaxed copy and the bookkeeping around it."""

    def __init__(self, model: LPModel, reference_map: ReferenceMap, solver: Solver, options: AnalyzerOptions):
        self.model = model
        self.reference_map = reference_map
        self.solver = solver
        self.options = options
        self.elastic: Dict[str, SlackTerms] = {}
        # (constraint, slack, slack had a lower bound) in hardening order
        self.de_elasticized: List[Tuple[str, str, bool]] = []
        self.solves = 0

    @property
    def status(self) -> Optional[str]:
        return self.model.status

    def solve(self) -> str:
        optimize(self.model, self.solver, self.options.solver_options)
        self.solves += 1
        return self.model.status

    def is_active(self, slack: str) -> bool:
        return value(self.model, slack) > self.options.tolerance


class IISResolver:
    def __init__(self, options: Optional[AnalyzerOptions] = None) -> None:
        self.options = options or AnalyzerOptions()

    def find_one_iis(self, model: LPModel, solver: Solver) -> Optional[List[str]]:
        """Return the names of one IIS of ``model``, in model order.

        ``model`` must already have been solved and found infeasible; otherwise
        ``None`` is returned without searching.
        """

        if model.status != "infeasible":
            logger.info(
                "IIS resolver cannot continue because the model status is %s, not infeasible",
                model.status or "unknown (never solved)",
            )
            return None

        workspace = self._relax(model, solver)
        self._harden_active_rows(workspace)
        candidates = set(self._deletion_filter(workspace))

        iis = [
            cons.name
            for cons in model.constraints
            if workspace.reference_map.to_copy(cons.name) in candidates
        ]
        logger.info("IIS with %d constraints found after %d solves", len(iis), workspace.solves)
        return iis

    def _relax(self, model: LPModel, solver: Solver) -> ElasticWorkspace:
        copied, reference_map = copy_model(model)
        workspace = ElasticWorkspace(copied, reference_map, solver, self.options)
        workspace.elastic = relax_with_penalty(copied, penalty=self.options.penalty)
        status = workspace.solve()
        _expect(status, OPTIMAL_STATUSES | INFEASIBLE_STATUSES, "elastic relaxation")
        return workspace

    def _harden_active_rows(self, workspace: ElasticWorkspace) -> None:
        rounds = len(workspace.elastic)
        for _ in range(rounds):
            if workspace.status in INFEASIBLE_STATUSES:
                return
            changed = False
            # dict order is constraint creation order
            for cons in list(workspace.elastic):
                if workspace.status in INFEASIBLE_STATUSES:
                    break
                if self._harden(workspace, cons):
                    changed = True
                    status = workspace.solve()
                    _expect(status, OPTIMAL_STATUSES | INFEASIBLE_STATUSES, "slack fixing")
            if not changed:
                raise NumericalInstabilityError(
                    "IIS failed: no active slack left to fix but the elastic model is still feasible",
                    status=workspace.status,
                )

        if workspace.status not in INFEASIBLE_STATUSES:
            logger.debug("Slack fixing stopped after %d rounds with status %s", rounds, workspace.status)

    def _harden(self, workspace: ElasticWorkspace, cons: str) -> bool:
        terms = workspace.elastic[cons]
        if len(terms) == 1:
            slack, _ = terms[0]
            if not workspace.is_active(slack):
                return False
            self._fix_slack(workspace, cons, slack)
            del workspace.elastic[cons]
            return True

        (first, first_coef), (second, second_coef) = terms
        first_active = workspace.is_active(first)
        second_active = workspace.is_active(second)
        if first_active and second_active:
            raise NumericalInstabilityError(
                f"IIS failed due to numerical instability: both slacks of '{cons}' are active"
            )
        if first_active:
            self._fix_slack(workspace, cons, first)
            workspace.elastic[cons] = [(second, second_coef)]
            return True
        if second_active:
            self._fix_slack(workspace, cons, second)
            workspace.elastic[cons] = [(first, first_coef)]
            return True
        return False

    def _fix_slack(self, workspace: ElasticWorkspace, cons: str, slack: str) -> None:
        had_lower = has_lower_bound(workspace.model, slack)
        fix_variable(workspace.model, slack, 0.0)
        workspace.de_elasticized.append((cons, slack, had_lower))

    def _deletion_filter(self, workspace: ElasticWorkspace) -> List[str]:
        candidates: List[str] = []
        for cons, slack, had_lower in workspace.de_elasticized:
            unfix_variable(workspace.model, slack)
            if had_lower:
                set_lower_bound(workspace.model, slack, 0.0)
            else:
                set_upper_bound(workspace.model, slack, 0.0)
            status = workspace.solve()
            if status in INFEASIBLE_STATUSES:
                # still infeasible without this row: not part of the IIS
                continue
            if status in OPTIMAL_STATUSES:
                candidates.append(cons)
                fix_variable(workspace.model, slack, 0.0)
                continue
            raise NumericalInstabilityError(
                f"IIS failed due to numerical instability, got status {status}",
                status=status,
            )
        return candidates


def _expect(status: str, allowed, phase: str) -> None:
    if status not in allowed:
        raise NumericalInstabilityError(
            f"IIS failed during {phase}: unexpected solver status {status}",
            status=status,
        )
