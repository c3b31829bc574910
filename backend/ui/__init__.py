"""pygame front end for the checkers engine."""
