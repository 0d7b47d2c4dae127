"""Tests for employment-type and pay-basis classification."""

import pytest

from payroll_kernel.domain.classification import (
    EmploymentType,
    PayBasis,
    classify_employment,
    classify_pay_basis,
    is_known_employment_spelling,
)


class TestClassifyEmployment:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("근로소득", EmploymentType.WAGE_EARNER),
            ("근로소득자", EmploymentType.WAGE_EARNER),
            ("Wage Earner", EmploymentType.WAGE_EARNER),
            ("사업소득", EmploymentType.CONTRACTOR),
            ("business-income", EmploymentType.CONTRACTOR),
            ("freelancer", EmploymentType.CONTRACTOR),
            ("외국인", EmploymentType.FOREIGN_WORKER),
            ("FOREIGNER", EmploymentType.FOREIGN_WORKER),
            ("일용직", EmploymentType.DAILY_WORKER),
            (" daily ", EmploymentType.DAILY_WORKER),
            ("미입력", EmploymentType.UNSPECIFIED),
        ],
    )
    def test_known_spellings(self, raw, expected):
        assert classify_employment(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "intern", "정규직"])
    def test_blank_and_unknown_are_unspecified(self, raw):
        assert classify_employment(raw) is EmploymentType.UNSPECIFIED

    def test_enum_passes_through(self):
        assert classify_employment(EmploymentType.CONTRACTOR) is EmploymentType.CONTRACTOR

    def test_known_spelling_check(self):
        assert is_known_employment_spelling(None)
        assert is_known_employment_spelling("미입력")
        assert not is_known_employment_spelling("intern")

    def test_labels(self):
        assert EmploymentType.WAGE_EARNER.label == "근로소득"
        assert EmploymentType.FOREIGN_WORKER.label == "외국인"
        assert EmploymentType.UNSPECIFIED.label == "unspecified"


class TestClassifyPayBasis:

    @pytest.mark.parametrize("raw", ["hourly", "HOURLY", "시급", None, ""])
    def test_hourly(self, raw):
        assert classify_pay_basis(raw) is PayBasis.HOURLY

    @pytest.mark.parametrize("raw", ["monthly", "월급", "salary"])
    def test_monthly(self, raw):
        assert classify_pay_basis(raw) is PayBasis.MONTHLY
