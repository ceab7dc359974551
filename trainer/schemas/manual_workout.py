"""
Input file schema for manually logged and edited workouts.

Example file:

    {
      "completed_date": "2024-03-01T18:30:00Z",
      "total_duration": 25,
      "exercises": [
        {"exercise_id": "plank-001", "sets": [40, 40, 35]},
        {"exercise_id": "glute-bridge-001", "sets": [15, 15, 12]}
      ]
    }

For edits every field is optional; omitted fields keep their stored value.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ManualExerciseInput(BaseModel):
    exercise_id: str
    sets: List[int]  # reps or seconds, one per set


class ManualWorkoutInput(BaseModel):
    completed_date: Optional[datetime] = None
    total_duration: Optional[int] = None  # minutes
    exercises: Optional[List[ManualExerciseInput]] = None
