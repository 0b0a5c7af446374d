"""Lineup optimization and position grading for fantasy football rosters."""
