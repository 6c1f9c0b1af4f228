"""Domain models - pure Python dataclasses representing budgeting entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class DebtSnapshot:
    """Point-in-time view of a debt fed into payoff simulations"""

    balance: float
    apr: float  # percent, e.g. 24.0 for 24%
    minimum_payment: float
    promotional_apr: Optional[float] = None
    promotional_months_remaining: Optional[int] = None
    name: Optional[str] = None
    debt_id: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.debt_id or "debt"

    def effective_apr(self) -> float:
        """Promotional APR while its window is open, standard APR otherwise"""
        if (
            self.promotional_apr is not None
            and self.promotional_months_remaining is not None
            and self.promotional_months_remaining > 0
        ):
            return self.promotional_apr
        return self.apr


@dataclass
class PayoffMilestone:
    """Month in which a single debt reached zero"""

    label: str
    month: int


@dataclass
class SimulationResult:
    """Output of a payoff simulation"""

    strategy: str
    extra_payment: float
    month_cap: int
    months_to_payoff: int
    converged: bool
    projected_payoff_date: Optional[date]
    total_interest_paid: float
    interest_saved: Optional[float] = None
    months_saved: Optional[int] = None
    balance_history: List[float] = field(default_factory=list)
    payoff_order: List[PayoffMilestone] = field(default_factory=list)


@dataclass
class DebtPriority:
    """Priority card for a single debt (1-10 score)"""

    debt: DebtSnapshot
    score: int
    band: str  # "high", "medium" or "low"
    payoff_progress: float


@dataclass
class PrioritySummary:
    """Totals shown above the priority cards"""

    total_minimum_payments: float
    total_balance: float
    estimated_months: Optional[int]


@dataclass
class DebtRiskAssessment:
    """Debt-to-income check outcome"""

    debt_to_income_ratio: float
    risk_level: str  # "none", "medium" or "high"
    should_alert: bool
    message: str


@dataclass
class ProposalItem:
    """One line of a surplus allocation proposal"""

    category: str
    name: str
    amount: float
    share: float
    can_apply: bool
    debt_id: Optional[str] = None


@dataclass
class MonthlyProposal:
    """Surplus allocation across debt, emergency fund and variable expenses"""

    cash_flow: float
    monthly_savings: float
    surplus: float
    items: List[ProposalItem]

    @property
    def debt_allocation(self) -> float:
        return sum(item.amount for item in self.items if item.debt_id is not None)


@dataclass
class DebtAccount:
    """Stored debt with its payment schedule fields"""

    debt_id: str
    name: str
    balance: float
    minimum_payment: float
    payment_day: int
    is_installment: bool = False
    installment_amount: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class ScheduledPayment:
    """Payment tracker entry for one debt in one month"""

    debt_id: str
    month_year: date  # first day of the month
    payment_date: date
    amount: float
    status: str = "pending"


@dataclass
class Recommendation:
    """Rule-based advice shown on the debt dashboard"""

    kind: str  # "debt_free", "promotion_ending", "extra_payment", "focus_order" or "consolidate"
    message: str
    debt_labels: List[str] = field(default_factory=list)
