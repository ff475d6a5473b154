"""Browse, search and sort the ExerciseDB exercise catalog."""
