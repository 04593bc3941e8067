"""Block scanning, checkpointing and record writing."""
