# src/construct_mixins/services/__init__.py
"""Mixins de domínio construídos sobre o core (clientes do engine)."""
