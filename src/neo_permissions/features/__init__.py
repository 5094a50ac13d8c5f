"""Feature modules of neo-permissions."""
