"""
Versify - Property-Based Testing Suite

Property-based tests using Hypothesis for the order independence and
totality of verse mappings.
"""
