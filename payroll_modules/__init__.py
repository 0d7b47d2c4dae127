"""
Payroll business modules.

Modules hold the nouns of the workforce domain as frozen dataclasses and
the adapters that read them from document-store records.  Calculation
lives in ``payroll_engines``.
"""
