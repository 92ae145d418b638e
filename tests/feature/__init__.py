"""
Feature tests for end-to-end client behaviour.

Tests verify multi-page flows against a scripted transport:
- Offset-cursor pagination
- Page bounds and cursor cycles
- Cancellation between pages
"""
