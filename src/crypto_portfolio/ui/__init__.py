"""Per-row interaction controllers and the process-wide keyboard hub."""
