"""
Application Layer for the training engine.

This package contains:
- ports/: Abstract collaborator interfaces (what the engine needs)
- use_cases/: Workflows coordinating services and ports
- exceptions: Errors surfaced to callers
"""
