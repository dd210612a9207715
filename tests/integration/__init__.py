"""
Integration Tests Package

End-to-end generation through the engine, the HTTP API and the CLI,
always against the offline MockProvider.

TEST AXIOMS:
=============
1. Determinism: same instructions + same provider reply = same timeline
2. Explicit failure: every failure surfaces as a typed GenerationError
3. No network access
"""
