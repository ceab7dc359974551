"""
Application Layer for the adaptive trainer.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- services/: ProfileService, the single writer of the user profile
- use_cases/: One class per user-facing operation
- exceptions: The TrainerError hierarchy
"""
