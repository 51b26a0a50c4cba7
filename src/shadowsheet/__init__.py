"""shadowsheet: derived statistics and choice bookkeeping for tiered-path RPG characters."""
