"""REST services around the Belote score sheet engine."""
