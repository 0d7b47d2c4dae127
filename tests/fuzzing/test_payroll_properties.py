"""
Hypothesis property tests for the payroll engines.

Properties checked over generated employees, contracts and shifts:
- gross = base pay + weekly-holiday pay
- net = gross - (insurance + tax)
- probation hours + regular hours = total worked hours
- identical inputs give identical results
- monthly parts sum to the rounded prorated total
- every paid amount is a whole won
"""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from payroll_engines import PayrollCalculator, monthly_base_pay
from payroll_engines.probation import ProbationSplit
from payroll_kernel.domain.values import round_won
from payroll_modules.workforce import Contract, Employee, PayPeriod, Shift

PERIOD = PayPeriod(2025, 3)
FIRST_DAY = date(2025, 2, 17)

EMPLOYMENT_TYPES = ["근로소득", "사업소득", "외국인", "일용직", "미입력", "intern", None]
SALARY_TYPES = ["hourly", "monthly", "시급", "월급", None]

hours_st = st.decimals(min_value=0, max_value=12, places=2, allow_nan=False, allow_infinity=False)

fuzz_settings = settings(
    max_examples=150,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


@composite
def shifts_st(draw):
    count = draw(st.integers(min_value=0, max_value=25))
    return [
        Shift(
            work_date=FIRST_DAY + timedelta(days=draw(st.integers(min_value=0, max_value=55))),
            hours=draw(hours_st),
            branch_id=draw(st.sampled_from(["b-1", "b-2", "b-3"])),
            branch_name="지점",
        )
        for _ in range(count)
    ]


@composite
def employee_st(draw):
    probation = draw(st.booleans())
    start = end = None
    if probation:
        start = FIRST_DAY + timedelta(days=draw(st.integers(min_value=0, max_value=40)))
        end = start + timedelta(days=draw(st.integers(min_value=0, max_value=60)))
    return Employee(
        id="emp-1",
        name="테스트",
        probation_start=start,
        probation_end=end,
        includes_weekly_holiday_in_wage=draw(st.booleans()),
    )


@composite
def contract_st(draw):
    salary_type = draw(st.sampled_from(SALARY_TYPES))
    if salary_type in ("monthly", "월급"):
        amount = draw(st.integers(min_value=0, max_value=8_000_000))
    else:
        amount = draw(st.integers(min_value=0, max_value=50_000))
    return Contract(
        employment_type=draw(st.sampled_from(EMPLOYMENT_TYPES)),
        salary_type=salary_type,
        salary_amount=Decimal(amount),
        includes_holiday_allowance=draw(st.booleans()),
    )


class TestPayResultInvariants:

    @fuzz_settings
    @given(employee=employee_st(), contract=contract_st(), shifts=shifts_st())
    def test_accounting_identities(self, employee, contract, shifts):
        result = PayrollCalculator().calculate(employee, contract, shifts, PERIOD)

        assert result.gross_pay == result.base_pay + result.weekly_holiday_pay
        assert result.base_pay == result.probation_pay + result.regular_pay
        assert result.deductions.total == result.deductions.insurance + result.deductions.tax
        assert result.net_pay == result.gross_pay - result.deductions.total
        assert result.probation_hours + result.regular_hours == result.total_work_hours
        assert sum((b.work_hours for b in result.branches), Decimal("0")) == result.total_work_hours

    @fuzz_settings
    @given(employee=employee_st(), contract=contract_st(), shifts=shifts_st())
    def test_amounts_are_whole_won(self, employee, contract, shifts):
        result = PayrollCalculator().calculate(employee, contract, shifts, PERIOD)
        for amount in (result.base_pay, result.weekly_holiday_pay, result.deductions.total, result.net_pay):
            assert amount == amount.to_integral_value()
            assert amount >= 0

    @fuzz_settings
    @given(employee=employee_st(), contract=contract_st(), shifts=shifts_st())
    def test_idempotent(self, employee, contract, shifts):
        calc = PayrollCalculator()
        assert calc.calculate(employee, contract, shifts, PERIOD) == calc.calculate(
            employee, contract, shifts, PERIOD
        )

    @fuzz_settings
    @given(employee=employee_st(), shifts=shifts_st())
    def test_no_contract_pays_nothing(self, employee, shifts):
        result = PayrollCalculator().calculate(employee, None, shifts, PERIOD)
        assert result.gross_pay == Decimal("0")
        assert result.net_pay == Decimal("0")


class TestMonthlyProration:

    @fuzz_settings
    @given(
        amount=st.integers(min_value=1, max_value=10_000_000),
        probation=hours_st,
        regular=hours_st,
    )
    def test_parts_sum_to_rounded_prorated_total(self, amount, probation, regular):
        split = ProbationSplit(probation_hours=probation, regular_hours=regular)
        pay = monthly_base_pay(split, Decimal(amount), period_in_probation=False)

        if split.total_hours > 0:
            pr = probation / split.total_hours
            rr = regular / split.total_hours
            expected = round_won(Decimal(amount) * (pr * Decimal("0.9") + rr))
        else:
            expected = Decimal(amount)
        assert pay.probation_pay + pay.regular_pay == expected
        assert pay.probation_pay == round_won(pay.probation_pay)
