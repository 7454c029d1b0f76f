"""Services Layer — form actions and sign-in orchestration.

Invariants:
    - Services compose pure core functions with protocol-typed infrastructure
    - Expected failures come back as values (ActionState, AuthOutcome); anything
      else propagates to the global error handlers
"""
