"""Exchange price oracles queried over Tor."""
