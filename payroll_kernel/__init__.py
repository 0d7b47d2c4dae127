"""
Payroll Kernel

Shared foundation for the shift payroll engine:
- Typed exceptions with machine-readable codes
- Structured JSON logging with context propagation
- Decimal rounding helpers for whole-won amounts
- Closed employment classification / pay basis enumerations
- Injectable clock for the caller layer
"""

__version__ = "0.1.0"
