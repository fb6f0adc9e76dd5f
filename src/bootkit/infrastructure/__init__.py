"""Individual bootstrap steps, each touching one piece of process state."""
