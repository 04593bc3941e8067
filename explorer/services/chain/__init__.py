"""Chain access: client, interface descriptions, contract readers, prober."""
