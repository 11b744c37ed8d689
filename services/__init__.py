"""Pure wellness computations used by the DailyWell routes."""
