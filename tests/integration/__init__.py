"""
Integration Tests Package

Request -> parse -> hand-off -> consume -> project, end to end.

TEST AXIOMS:
=============
1. One accepted request = exactly one Document on the queue
2. Rejected requests never reach the queue
3. Explicit failure: no silent fallbacks
"""
