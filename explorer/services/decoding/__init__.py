"""ABI-driven decoding of event logs and calldata."""
