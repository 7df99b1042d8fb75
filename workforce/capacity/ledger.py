"""
Capacity arithmetic.

Calculates:
- Available capacity: what is still free on a team member (never negative)
- Projected capacity: what a member's load becomes after adding workload
- Status: ok / warning / over classification of a projection

project_capacity is the only place the status thresholds are applied.
"""

import math
from workforce.capacity.models import (
    TeamMember,
    CapacityCalculation,
    CapacityStatus,
    AvailabilityBand,
    WorkloadValidation,
    MemberCapacitySummary,
    MAX_CAPACITY,
    MIN_WORKLOAD_PERCENTAGE,
    MAX_WORKLOAD_PERCENTAGE,
)


WARNING_UTILIZATION = 85
OVER_UTILIZATION = 100

# Projected workload (%) from which a new assignment shows a high-utilization warning
HIGH_CAPACITY_WARNING_THRESHOLD = 80
DECIMAL_PRECISION = 1

# Over-allocation is permitted once the operator confirms it
ALLOW_OVER_ALLOCATION = True


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")


def available_capacity(member: TeamMember) -> float:
    """Capacity still free on a member, clamped at zero for display."""
    return max(0.0, member.max_capacity - member.current_capacity)


def utilization_percent(member: TeamMember) -> float:
    """Current load as a percentage of the member's maximum (unclamped)."""
    return member.current_capacity * 100 / member.max_capacity


def classify_utilization(utilization: float) -> CapacityStatus:
    """Map a utilization percentage to ok / warning / over."""
    if utilization < WARNING_UTILIZATION:
        return CapacityStatus.OK
    if utilization <= OVER_UTILIZATION:
        return CapacityStatus.WARNING
    return CapacityStatus.OVER


def project_capacity(
    current_used: float,
    additional_capacity: float,
    max_capacity: float = MAX_CAPACITY
) -> CapacityCalculation:
    """
    Project a member's capacity after taking on additional workload.

    The projection is not clamped: over-allocation shows up as a utilization
    above 100 and an OVER status. A negative additional_capacity represents
    capacity being freed and lowers the projection.

    Args:
        current_used: Capacity already consumed
        additional_capacity: Workload being added (or freed, if negative)
        max_capacity: Full capacity of the member

    Returns:
        CapacityCalculation with the projection and its status
    """
    _require_finite("current_used", current_used)
    _require_finite("additional_capacity", additional_capacity)
    _require_finite("max_capacity", max_capacity)
    if max_capacity <= 0:
        raise ValueError(f"max_capacity must be positive, got {max_capacity!r}")

    projected = current_used + additional_capacity
    utilization = projected * 100 / max_capacity

    return CapacityCalculation(
        current=current_used,
        additional=additional_capacity,
        projected=projected,
        max=max_capacity,
        utilization=utilization,
        status=classify_utilization(utilization),
    )


def availability_band(available: float) -> AvailabilityBand:
    """Band used when listing members by how much they can still take on."""
    if available >= 100:
        return AvailabilityBand.FULLY_AVAILABLE
    if available >= 50:
        return AvailabilityBand.AVAILABLE
    if available >= 20:
        return AvailabilityBand.LIMITED
    if available > 0:
        return AvailabilityBand.LOW
    if available == 0:
        return AvailabilityBand.AT_CAPACITY
    return AvailabilityBand.OVER_ASSIGNED


def format_available_capacity(available: float) -> str:
    """Render available capacity, e.g. '35.0%' or '12.5% over'."""
    if available < 0:
        return f"{abs(available):.{DECIMAL_PRECISION}f}% over"
    return f"{available:.{DECIMAL_PRECISION}f}%"


def validate_assignment_workload(
    workload_percentage: float,
    available: float
) -> WorkloadValidation:
    """
    Check a new assignment's workload against a member's available capacity.

    Rules:
    - Workload must be within MIN_WORKLOAD_PERCENTAGE..MAX_WORKLOAD_PERCENTAGE
    - Going over capacity is allowed but requires confirmation
    - Landing between 80% and 100% workload carries a warning
    """
    _require_finite("workload_percentage", workload_percentage)
    _require_finite("available", available)

    projected_available = available - workload_percentage
    projected_workload = MAX_CAPACITY - projected_available
    is_over = projected_available < 0
    is_nearing = HIGH_CAPACITY_WARNING_THRESHOLD <= projected_workload <= MAX_CAPACITY

    def _result(**kwargs) -> WorkloadValidation:
        return WorkloadValidation(
            projected_available=projected_available,
            is_over_capacity=is_over,
            is_nearing_capacity=is_nearing,
            **kwargs
        )

    if workload_percentage <= 0:
        return _result(is_valid=False, error_message="Assignment workload must be greater than 0%")

    if workload_percentage < MIN_WORKLOAD_PERCENTAGE:
        return _result(
            is_valid=False,
            error_message=f"Workload must be at least {MIN_WORKLOAD_PERCENTAGE}%"
        )

    if workload_percentage > MAX_WORKLOAD_PERCENTAGE:
        return _result(
            is_valid=False,
            error_message=f"Single assignment cannot exceed {MAX_WORKLOAD_PERCENTAGE}%"
        )

    if is_over:
        return _result(
            is_valid=True,
            warning_message="This assignment exceeds 100% capacity. Team member will be marked as over-assigned.",
            requires_confirmation=True
        )

    if is_nearing:
        return _result(
            is_valid=True,
            warning_message=f"Warning: This will bring team member to {projected_workload:.0f}% capacity (high utilization)"
        )

    return _result(is_valid=True)


def can_accept_assignment(member: TeamMember, workload_percentage: float = 0) -> bool:
    """Whether a member may be offered another assignment."""
    if ALLOW_OVER_ALLOCATION:
        return True
    return member.max_capacity - member.current_capacity - workload_percentage > 0


def member_capacity_summary(member: TeamMember, workload_percentage: float = 0) -> MemberCapacitySummary:
    """
    Available capacity of a member after an optional extra workload.

    Unlike available_capacity, the figure here goes negative for
    over-assigned members so it can be shown as "X% over".
    """
    available = round(member.max_capacity - member.current_capacity - workload_percentage, DECIMAL_PRECISION)
    return MemberCapacitySummary(
        member_id=member.id,
        member_name=member.name,
        available_capacity=available,
        band=availability_band(available),
        formatted_capacity=format_available_capacity(available),
    )
