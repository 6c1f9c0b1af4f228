"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Literal, Optional


class DebtCreateRequest(BaseModel):
    """Request body for POST /v1/debts"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    name: str = Field(..., min_length=1)
    bank: Optional[str] = None
    balance: float = Field(..., ge=0)
    apr: float = Field(..., ge=0, lt=100, description="Annual percentage rate, percent")
    minimum_payment: float = Field(..., ge=0)
    payment_day: int = Field(1, ge=1, le=31)
    promotional_apr: Optional[float] = Field(None, ge=0, lt=100)
    promotional_apr_end_date: Optional[date] = None
    is_installment: bool = False
    installment_amount: Optional[float] = Field(None, ge=0)
    number_of_installments: Optional[int] = Field(None, gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class DebtResponse(BaseModel):
    """Stored debt"""

    debt_id: str
    name: str
    bank: Optional[str] = None
    balance: float
    apr: float
    minimum_payment: float
    payment_day: int
    promotional_apr: Optional[float] = None
    promotional_apr_end_date: Optional[date] = None
    is_installment: bool
    installment_amount: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class DebtListResponse(BaseModel):
    """Response for GET /v1/debts"""

    user_id: str
    total_balance: float
    total_minimum_payments: float
    debts: List[DebtResponse]


class DebtInput(BaseModel):
    """Inline debt for ad-hoc forecasts"""

    name: Optional[str] = None
    balance: float = Field(..., ge=0)
    apr: float = Field(..., ge=0)
    minimum_payment: float = Field(..., ge=0)
    promotional_apr: Optional[float] = Field(None, ge=0)
    promotional_months_remaining: Optional[int] = Field(None, ge=0)


class ForecastRequest(BaseModel):
    """Request body for POST /v1/forecast; inline debts take precedence over stored ones"""

    user_id: Optional[str] = None
    debts: Optional[List[DebtInput]] = None
    extra_payment: float = Field(0.0, ge=0)
    strategy: Literal["avalanche", "snowball"] = "avalanche"
    month_cap: Optional[int] = Field(None, gt=0)
    start_date: Optional[date] = None


class PayoffMilestoneSchema(BaseModel):
    label: str
    month: int


class ForecastResponse(BaseModel):
    """Payoff projection formatted for display"""

    strategy: str
    extra_payment: float
    month_cap: int
    converged: bool
    payoff_status: Literal["paid_off", "undetermined"]
    months_to_payoff: int
    projected_payoff_date: Optional[date] = None
    payoff_month: Optional[str] = None  # "YYYY-MM"
    duration_years: Optional[int] = None
    duration_months: Optional[int] = None
    total_interest_paid: float
    interest_saved: Optional[float] = None
    months_saved: Optional[int] = None
    balance_history: List[float] = []
    payoff_order: List[PayoffMilestoneSchema] = []


class DebtPrioritySchema(BaseModel):
    debt_id: Optional[str] = None
    name: Optional[str] = None
    balance: float
    apr: float
    minimum_payment: float
    score: int
    band: str
    payoff_progress: float


class PriorityResponse(BaseModel):
    """Response for GET /v1/debts/priority"""

    user_id: str
    method: str
    total_minimum_payments: float
    total_balance: float
    estimated_months: Optional[int] = None
    debts: List[DebtPrioritySchema]


class RecommendationSchema(BaseModel):
    kind: str
    message: str
    debt_labels: List[str] = []


class RecommendationsResponse(BaseModel):
    """Response for GET /v1/debts/recommendations"""

    user_id: str
    recommendations: List[RecommendationSchema]


class RiskCheckRequest(BaseModel):
    """Request body for POST /v1/risk/check"""

    user_id: str = Field(..., min_length=1)
    monthly_income: float = Field(..., ge=0)
    email: Optional[str] = None


class RiskCheckResponse(BaseModel):
    debt_to_income_ratio: float
    risk_level: str
    message: str
    alert_created: bool
    alert_id: Optional[str] = None


class AlertSchema(BaseModel):
    alert_id: str
    alert_type: str
    risk_level: str
    debt_to_income_ratio: float
    message: str
    acknowledged: bool
    acknowledged_at: Optional[str] = None
    created_at: str


class AlertListResponse(BaseModel):
    user_id: str
    alerts: List[AlertSchema]


class ProposalRequest(BaseModel):
    """Request body for POST /v1/proposal"""

    user_id: str = Field(..., min_length=1)
    cash_flow: float
    monthly_savings: float = Field(0.0, ge=0)


class AllocationSchema(BaseModel):
    category: str
    name: str
    amount: float
    share: float
    can_apply: bool
    debt_id: Optional[str] = None


class ProposalResponse(BaseModel):
    """Response for POST /v1/proposal and GET /v1/proposal/{proposal_id}"""

    proposal_id: str
    user_id: str
    surplus: float
    strategy: str
    allocations: List[AllocationSchema]
    converged: bool
    months_to_payoff: int
    projected_payoff_date: Optional[date] = None
    total_interest_paid: float
    interest_saved: Optional[float] = None
    created_at: str


class PaymentGenerateRequest(BaseModel):
    """Request body for POST /v1/payments/generate; no user_id means every user"""

    user_id: Optional[str] = None
    today: Optional[date] = None


class PaymentGenerateResponse(BaseModel):
    generated: int
    skipped: int
    debts_processed: int
    message: str
