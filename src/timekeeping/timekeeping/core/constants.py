"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Payroll cycle runs from the 22nd of the previous month to the 21st.
PAYROLL_CYCLE_START_DAY = 22
PAYROLL_CYCLE_END_DAY = 21

# Per-day salary always uses a 30 day month, whatever the cycle length.
PER_DAY_SALARY_DIVISOR = Decimal("30")
ABSENCE_PENALTY_MULTIPLIER = Decimal("1.5")

HOURS_QUANTUM = Decimal("0.01")
MONEY_QUANTUM = Decimal("0.01")

# datetime.weekday() value for Sunday
SUNDAY = 6
