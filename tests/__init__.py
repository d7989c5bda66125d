# Star Registry Test Suite
"""
Test suite including:
- Hash primitives against published vectors
- Block sealing and payload rules
- Ledger append, lookup and validation
- Signed star claims (valid, expired, forged, malformed)

Run with: pytest
"""
